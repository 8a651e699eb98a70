# Main.py
""""" Entry point for the Expression Calculator.

   Responsibilities:
   - With arguments: run the console front end (--eval / --diff)
   - Without arguments: verify required data files and start the Qt GUI
   - Configure logging from the "debug" setting

"""""
import sys
import logging
from pathlib import Path
from Calculus import config_manager as config_manager, CommandLine as CommandLine


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if the settings files are missing / moved / renamed.
      In production (.exe) files are embedded by the bundler -> this check is skipped.
    """

    REQUIRED = [
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error 1: The following files are missing or in the wrong location:", file=sys.stderr)
        for file_name in missing_files:
            print(f"- {file_name}", file=sys.stderr)
        sys.exit(1)


def configure_logging():
    debug = config_manager.load_setting_value("debug")
    logging.basicConfig(
        level=logging.DEBUG if debug == True else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():

    """
    Dispatch to the console or the GUI.
    - Keep this thin: no business logic here.
    """

    configure_logging()

    if len(sys.argv) > 1:
        sys.exit(CommandLine.main(sys.argv[1:]))

    is_running_as_exe = getattr(sys, 'frozen', False)
    if not is_running_as_exe:
        logging.getLogger(__name__).debug("Developer Mode: Checking file paths...")
        check_files_exist()

    # Imported here so the console mode works without a display
    from Calculus import UI as UI

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    main()
