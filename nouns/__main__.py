"""Entry point for python -m nouns"""

from nouns.app.cli import main

if __name__ == "__main__":
    main()
