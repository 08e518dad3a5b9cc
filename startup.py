import os
import sys
import uvicorn
import logging
import traceback

# Configure logging to stdout for the process supervisor
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Add the src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

sep = "=" * 60
logger.info(sep)
logger.info("Doctor Connect Backend Startup")
logger.info(sep)
logger.info(f"Python version: {sys.version.split()[0]}")
logger.info(f"Source path: {src_path}")

# Log critical environment variables (without exposing secrets)
logger.info("Environment Configuration:")
logger.info(f"  PORT: {os.environ.get('PORT', '8000')}")
logger.info(f"  APP_ENV: {os.environ.get('APP_ENV', 'not set')}")
logger.info(f"  MONGO_URI: {'✅ set' if os.environ.get('MONGO_URI') else '❌ not set'}")
logger.info(f"  MONGO_DB_NAME: {os.environ.get('MONGO_DB_NAME', 'not set')}")
logger.info(f"  CERTIFICATE_STORAGE_PATH: {os.environ.get('CERTIFICATE_STORAGE_PATH', 'not set')}")
if os.environ.get('SECURITY_SECRET_KEY'):
    key_len = len(os.environ['SECURITY_SECRET_KEY'])
    logger.info(f"  SECURITY_SECRET_KEY length: {key_len} chars {'✅' if key_len >= 32 else '❌ (must be >= 32)'}")
else:
    logger.info("  SECURITY_SECRET_KEY: ⚠️  not set (required unless APP_ENV is development or testing)")

if __name__ == "__main__":
    try:
        # Step 1: settings (catches config validation errors early)
        try:
            from doctorconnect.core.config import get_settings
            settings = get_settings()
            logger.info("✅ Settings loaded successfully")
            logger.info(f"  App name: {settings.app_name}")
            logger.info(f"  App version: {settings.app_version}")
            logger.info(f"  App environment: {settings.app_env}")
            logger.info(f"  Debug mode: {settings.debug}")
        except ValueError as ve:
            logger.error(f"❌ Configuration validation failed: {ve}")
            logger.error(traceback.format_exc())
            logger.error("⚠️  Common configuration issues:")
            logger.error("  1. SECURITY_SECRET_KEY must be set and >= 32 characters")
            logger.error("  2. MONGO_URI must start with mongodb:// or mongodb+srv://")
            sys.exit(1)

        # Step 2: import the app before handing it to uvicorn
        try:
            from doctorconnect.app import app  # noqa: F401
            logger.info("✅ Successfully imported doctorconnect.app")
        except Exception as import_error:
            logger.error(f"❌ Failed to import doctorconnect.app: {import_error}")
            logger.error(traceback.format_exc())
            sys.exit(1)

        port = int(os.environ.get("PORT", settings.port))
        host = os.environ.get("HOST", settings.host)
        logger.info(f"Step 3: Starting uvicorn server on {host}:{port}...")
        uvicorn.run(
            "doctorconnect.app:app",
            host=host,
            port=port,
            workers=1,
            log_level="info",
            access_log=True,
            timeout_keep_alive=75,
            timeout_graceful_shutdown=30,
        )
    except KeyboardInterrupt:
        logger.info("⚠️  Shutting down due to keyboard interrupt")
        sys.exit(0)
    except Exception as e:
        logger.error(sep)
        logger.error("❌ CRITICAL: Failed to start application")
        logger.error(f"Error: {e} ({type(e).__name__})")
        logger.error(traceback.format_exc())
        logger.error("Troubleshooting steps:")
        logger.error("1. Verify SECURITY_SECRET_KEY is >= 32 characters")
        logger.error("2. Verify the MongoDB connection string is correct and reachable")
        logger.error("3. Verify CERTIFICATE_STORAGE_PATH is writable")
        logger.error(sep)
        sys.exit(1)
