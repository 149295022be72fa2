from dirstack.cli import main

main()
