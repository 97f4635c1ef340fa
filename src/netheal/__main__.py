"""netheal CLI - Entry point when run as module"""

from netheal.cli import main

if __name__ == "__main__":
    main()
