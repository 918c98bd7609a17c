from twentyone.cli import run

run()
