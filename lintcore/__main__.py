"""Allow running discovery as a module: python -m lintcore."""

from lintcore.runner import main

if __name__ == "__main__":
    main()
