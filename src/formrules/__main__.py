from formrules.cli.validate_cli import main

main()
