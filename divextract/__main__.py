from divextract.main import main

main()
