"""
Entry point for the LearnLink terminal client.
"""
from .cli import app


def main():
    """Launch the chat client application."""
    app()


if __name__ == "__main__":
    main()
