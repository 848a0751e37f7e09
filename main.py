# Main.py
""""" Entry point for the calculation engine's terminal front-end.

   Responsibilities:
   - Verify required files exist when running from a source checkout
   - Hand the command line over to the terminal UI

"""""
import sys
from pathlib import Path

from calc_engine import UI as UI


PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
    """

    package_dir = PROJECT_ROOT / "calc_engine"

    REQUIRED = [
        package_dir / "UI.py",
        package_dir / "Calculator.py",
        package_dir / "MathEngine.py",
        package_dir / "Normalizer.py",
        package_dir / "Validator.py",
        package_dir / "debug.py",
        package_dir / "ScientificEngine.py",
        package_dir / "config_manager.py",
        package_dir / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main(argv=None):
    check_files_exist()
    return UI.main(argv)


if __name__ == "__main__":
    sys.exit(main())
