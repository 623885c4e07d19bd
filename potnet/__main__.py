from potnet.agent import main

main()
