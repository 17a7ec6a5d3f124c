"""Allow running as python -m jj_hunk."""

from jj_hunk.cli.main import main

if __name__ == "__main__":
    main()
