# Main.py
""""" Entry point for MultiCalc.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Configure logging (level from MULTICALC_LOG_LEVEL)
   - Verify required files exist in development mode
   - Start the Qt GUI

"""""
import logging
import os
import sys
from pathlib import Path

from MultiCalc import config_manager as config_manager

logger = logging.getLogger("MultiCalc")


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


def configure_logging():
    level_name = os.environ.get("MULTICALC_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler and this check is skipped.
    """

    package_dir = PROJECT_ROOT / "MultiCalc"

    REQUIRED = [
        package_dir / "UI.py",
        package_dir / "Calculator.py",
        package_dir / "MathEngine.py",
        package_dir / "ScientificEngine.py",
        package_dir / "BaseConverter.py",
        package_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json"
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        logger.error("The following files are missing or in the wrong location: %s", ", ".join(missing_files))
        sys.exit(1)


def main():

    """
    Load configuration and start the GUI. No business logic here.
    """

    configure_logging()
    if not getattr(sys, 'frozen', False):
        logger.debug("Developer mode: checking file paths")
        check_files_exist()

    all_settings = config_manager.load_setting_value("all")
    logger.info("Config loaded: %s", all_settings)

    # Imported late: the engine modules work without a display server
    from MultiCalc import UI as UI

    # The UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    main()
