from launchjar.cli import main

main()
