from translation_sync.cli import app

app(prog_name="tl8")
