from scoutboard import create_app

app = create_app()
