from chat_cli.cli.main import main

main()
