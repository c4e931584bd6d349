from bpdaily.cli.bp_daily import main

if __name__ == "__main__":
    raise SystemExit(main())
