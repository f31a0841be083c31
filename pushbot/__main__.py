from pushbot.cli import main

main()
