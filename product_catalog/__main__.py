from product_catalog.cli import main

main()
