from music_library.app import main

main()
