"""Tests for the markup window locator."""

from wardrobe_import.parsing.markup_window import (
    START_BUFFER_CHARS,
    crop_to_transactional_zone,
    locate_transactional_window,
    strip_forwarded_headers,
    truncate_recommendations,
)


def test_strip_forwarded_headers_drops_preamble():
    html = "From: me<br>---------- Forwarded message ---------<br><p>Order Summary</p>"

    result = strip_forwarded_headers(html)

    assert "From: me" not in result
    assert result.endswith("<p>Order Summary</p>")


def test_strip_forwarded_headers_uses_earliest_marker():
    html = "a Begin forwarded message b Forwarded message c"

    assert strip_forwarded_headers(html) == " b Forwarded message c"


def test_strip_forwarded_headers_without_marker_is_identity():
    html = "<p>Order Summary</p>"

    assert strip_forwarded_headers(html) == html


def test_crop_backs_up_from_start_marker():
    html = "A" * 2000 + "Order Summary" + "<img src='x.jpg'>" + "Subtotal" + "footer"

    result = crop_to_transactional_zone(html)

    assert result.startswith("A" * START_BUFFER_CHARS + "Order Summary")
    assert len(result) == START_BUFFER_CHARS + len("Order Summary<img src='x.jpg'>Subtotal")
    assert result.endswith("Subtotal")


def test_crop_start_clamps_to_zero():
    html = "header Order #123 items Subtotal footer"

    assert crop_to_transactional_zone(html) == "header Order #123 items Subtotal"


def test_crop_uses_latest_end_marker():
    html = "Your Order items Subtotal $10 Shipping $2 Order Total $12 footer"

    assert crop_to_transactional_zone(html).endswith("Order Total")


def test_crop_is_case_insensitive():
    html = "ORDER SUMMARY items SUBTOTAL footer"

    assert crop_to_transactional_zone(html) == "ORDER SUMMARY items SUBTOTAL"


def test_crop_without_markers_is_identity():
    html = "<p>Hello there</p><img src='a.jpg'>"

    assert crop_to_transactional_zone(html) == html


def test_end_marker_before_start_is_ignored():
    html = "Shipping" + "x" * 2000 + "Order Summary items"

    result = crop_to_transactional_zone(html)

    assert result.endswith("Order Summary items")
    assert not result.startswith("Shipping")


def test_end_marker_inside_buffer_before_start_is_ignored():
    html = "<h1>Shipping confirmation</h1><p>Order #123</p><img src='a.jpg' alt='Denim Jacket'><p>$45.00</p>"

    assert crop_to_transactional_zone(html) == html


def test_end_marker_after_start_still_crops():
    html = "<h1>Shipping confirmation</h1><p>Order #123</p><img src='a.jpg'><p>Subtotal</p><p>footer</p>"

    assert crop_to_transactional_zone(html).endswith("<img src='a.jpg'><p>Subtotal")


def test_strip_forwarded_headers_with_non_ascii_prefix():
    # "İ" lowercases to two code points
    html = "İİİİ Forwarded message<p>Blue Denim Jacket</p>"

    assert strip_forwarded_headers(html) == "<p>Blue Denim Jacket</p>"


def test_crop_offsets_hold_after_non_ascii_text():
    html = "İstanbul store<p>Order Summary</p><img src='a.jpg'><p>Subtotal</p>footer"

    assert crop_to_transactional_zone(html) == "İstanbul store<p>Order Summary</p><img src='a.jpg'><p>Subtotal"


def test_truncate_recommendations_after_non_ascii_text():
    html = "<p>İİ Linen Shirt</p><h3>Recommended for you</h3>"

    assert truncate_recommendations(html) == "<p>İİ Linen Shirt</p><h3>"


def test_truncate_recommendations():
    html = "items <h3>You Might Also Like</h3> more items"

    assert truncate_recommendations(html) == "items <h3>"


def test_locate_window_empty_body():
    assert locate_transactional_window("") == ""
    assert locate_transactional_window(None) == ""


def test_locate_window_strips_recommendations_only_when_asked():
    html = "Order Summary <img src='a.jpg'> Recommended for you <img src='b.jpg'>"

    assert "b.jpg" in locate_transactional_window(html)
    assert "b.jpg" not in locate_transactional_window(html, strip_recommendations=True)


def test_locate_window_on_fixture_excludes_recommendations(boutique_order_html):
    window = locate_transactional_window(boutique_order_html)

    assert "wool-blend-scarf" in window
    assert "silk-camisole" not in window
    assert window.endswith("Shipping")
