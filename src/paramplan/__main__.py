from paramplan.cli import main

main()
