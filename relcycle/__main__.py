from relcycle.cli.app import main

main()
