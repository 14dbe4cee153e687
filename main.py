from ltcreports.scraper.cli import main

if __name__ == "__main__":
    # Same as ``python -m ltcreports.scraper.cli``.
    raise SystemExit(main())
