from tokenfig.cli import main

main()
