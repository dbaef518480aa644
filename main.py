"""
Entrypoint: run the extractor CLI from a source checkout
"""

from divextract.main import main


if __name__ == "__main__":
    main()
