from cli.main import anirecog_cli


if __name__ == '__main__':
    anirecog_cli()
