# main.py
"""Main entry point for the trading strategy simulator."""
import os
import sys
import logging
from pathlib import Path

from dotenv import load_dotenv

from src.config.settings import Settings


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path("config/settings.yaml")
DASHBOARD_PATH = Path(__file__).parent / "src" / "dashboard" / "Home.py"


def check_env_vars() -> list[str]:
    """Report optional environment variables that are not set.

    Missing variables disable the feature that needs them instead of
    stopping the application.

    Returns:
        Names of the missing variables.
    """
    optional_vars = {
        "ANTHROPIC_API_KEY": "Sentiment advisor disabled",
        "JOURNAL_USER_ID": "Using an anonymous journal identity",
    }

    missing = [var for var in optional_vars if not os.getenv(var)]
    for var in missing:
        logger.warning(f"{var} not set: {optional_vars[var]}")

    return missing


def create_data_dirs(settings: Settings) -> None:
    """Create required data directories if they don't exist."""
    Path(settings.journal.data_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Data directories verified")


def print_startup_banner(settings: Settings) -> None:
    """Print system startup banner."""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.system.name}")
    logger.info(f"Version: {settings.system.version}")
    logger.info(f"Journal: {settings.journal.data_dir}")
    logger.info("=" * 60)


def load_and_validate_config(config_path: Path = CONFIG_PATH) -> Settings:
    """Load and validate configuration.

    Returns:
        Settings object loaded from YAML, or defaults if the file is missing.

    Raises:
        SystemExit: If YAML parsing or validation fails.
    """
    # Load environment variables
    load_dotenv()
    logger.info("✓ Loaded environment variables")

    check_env_vars()

    if not config_path.exists():
        logger.warning(f"{config_path} not found, using defaults")
        settings = Settings()
    else:
        try:
            settings = Settings.from_yaml(config_path)
            logger.info(f"✓ Settings loaded from {config_path}")
        except Exception as e:
            logger.error(f"Failed to parse {config_path}: {e}")
            sys.exit(1)

    logging.getLogger().setLevel(settings.system.log_level.upper())

    create_data_dirs(settings)

    return settings


def launch_dashboard() -> int:
    """Run the Streamlit dashboard in this process."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(DASHBOARD_PATH)]
    return stcli.main()


def main() -> None:
    settings = load_and_validate_config()
    print_startup_banner(settings)
    sys.exit(launch_dashboard())


if __name__ == "__main__":
    main()
