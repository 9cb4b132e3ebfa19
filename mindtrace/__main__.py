"""Allow ``python -m mindtrace``."""

from mindtrace.cli.main import main

if __name__ == "__main__":
    main()
