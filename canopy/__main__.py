from canopy.cli.app import main

main()
