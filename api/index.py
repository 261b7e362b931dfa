# api/index.py

import sys
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Get project root directory
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.append(str(ROOT_DIR))

# Load environment variables from .env file
env_path = ROOT_DIR / '.env'

if env_path.exists():
    logger.info(f"Loading .env from: {env_path}")
    load_dotenv(env_path)

    if not os.environ.get('CATALOG_API_BASE_URL'):
        logger.error("Missing required environment variable: CATALOG_API_BASE_URL")
        logger.info("Please ensure your .env file is properly configured.")
    else:
        logger.info("Environment configuration loaded successfully")
        logger.info(f"Flask Environment: {os.environ.get('FLASK_ENV', 'not set')}")
else:
    logger.warning(f"No .env file found at {env_path}")
    logger.info("Using system environment variables only")

from wardrobe import create_app

config_name = os.environ.get('FLASK_ENV', 'development')
app = create_app(config_name)

# Export app for WSGI servers
application = app

if __name__ == '__main__':
    # Production mode never runs the debugger
    if config_name == 'production':
        debug_mode = False
    else:
        debug_mode = os.environ.get('FLASK_DEBUG', 'false').lower() in ['true', '1', 'yes', 'on']

    app.run(debug=debug_mode, host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
