from zipfeed.cli.main import main


main()
