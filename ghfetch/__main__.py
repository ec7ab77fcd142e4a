from ghfetch.cli.app import main

main()
