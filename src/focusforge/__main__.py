from focusforge.main import main

main()
