from race_recap.cli import main

main()
