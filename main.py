import sys

from diabetes_risk.cli import main


if __name__ == "__main__":
    sys.exit(main(["--config", "config/default.yaml", *sys.argv[1:]]))
