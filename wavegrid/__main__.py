from wavegrid.cli import main

main()
