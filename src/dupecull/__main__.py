from dupecull.cli import main

main()
