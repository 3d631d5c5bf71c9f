from threaded_range_product.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
