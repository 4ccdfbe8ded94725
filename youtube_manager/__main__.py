from youtube_manager.cli import app

app(prog_name="youtube-manager")
