from apple_notes_exporter.cli import app


def main() -> None:
    app(prog_name="apple-notes-exporter")


if __name__ == "__main__":
    main()
