from tictactoe.console import main

main()
