"""Allow running with: python -m dexgate"""

from dexgate.main import main

if __name__ == "__main__":
    main()
