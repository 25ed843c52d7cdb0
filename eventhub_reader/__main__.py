from eventhub_reader.app import main

main()
