"""Allow ``python -m litconf``."""

from litconf.cli import main


if __name__ == "__main__":
    main()
