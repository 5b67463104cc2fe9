"""Entry point for launching the Drawboy desktop app."""

from app.main import main


if __name__ == "__main__":
    main()
