from alertdefs.cli import app

app()
