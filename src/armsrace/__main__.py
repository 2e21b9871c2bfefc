from armsrace.main import main

main()
