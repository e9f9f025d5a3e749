import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from wardrobe_import.logging_config import get_logger

# Load .env from project root (parent directory)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logger = get_logger(__name__)

app = Flask(__name__)

# Frontend origins allowed to call the API
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
CORS(app, origins=[FRONTEND_URL, "http://127.0.0.1:5173"])

# Order emails can be large; allow batches up to 16MB
app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024

# ============================================================================
# REGISTER BLUEPRINTS
# ============================================================================

from routes.health import health_bp
from routes.wardrobe_import import wardrobe_import_bp

app.register_blueprint(health_bp)
app.register_blueprint(wardrobe_import_bp)

# ============================================================================
# APPLICATION STARTUP
# ============================================================================

if __name__ == "__main__":
    # Fail fast on bad configuration (invalid env values or lexicon file)
    from config import get_extraction_config

    get_extraction_config()

    logger.info("Wardrobe import backend starting on http://localhost:5000")
    app.run(debug=False, use_reloader=False, host="0.0.0.0", port=5000)
