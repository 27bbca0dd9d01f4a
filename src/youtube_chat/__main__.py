from youtube_chat.cli import main

main()
