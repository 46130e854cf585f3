from bigblast.main import main

main()
