from calexpr.cli import main

main()
