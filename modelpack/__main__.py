from modelpack._internal.cli.main import main

main()
