from cli.stream_title import stream_title


def test_stream_title_from_title(runner, cli_obj):
    result = runner.invoke(stream_title, ["One Piece | Netflix"], obj=cli_obj)
    assert result.exit_code == 0
    assert "Netflix: One Piece" in result.output


def test_stream_title_with_url(runner, cli_obj):
    result = runner.invoke(
        stream_title,
        ["Attack on Titan - Watch on Crunchyroll", "--url", "https://www.crunchyroll.com/watch/GXJHM3N/episode"],
        obj=cli_obj,
    )
    assert result.exit_code == 0
    assert "Crunchyroll: Attack on Titan" in result.output


def test_stream_title_unrecognized(runner, cli_obj):
    result = runner.invoke(stream_title, ["Just a browser tab"], obj=cli_obj)
    assert result.exit_code == 1
    assert "No streaming service recognized" in result.output
