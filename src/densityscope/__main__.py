from densityscope.cli import main

main()
