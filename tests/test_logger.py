from dms_console.logger import configure_logging, logger


def test_configure_logging_filters_by_level(tmp_path):
    try:
        configure_logging("WARNING", tmp_path)
        logger.info("routine detail")
        logger.warning("something to look at")
        logger.complete()
    finally:
        configure_logging()

    [log_file] = list(tmp_path.glob("*.log"))
    text = log_file.read_text(encoding="utf-8")
    assert "something to look at" in text
    assert "routine detail" not in text


def test_configure_logging_replaces_its_own_sink(tmp_path):
    first, second = tmp_path / "a", tmp_path / "b"
    try:
        configure_logging("INFO", first)
        configure_logging("INFO", second)
        logger.info("only in the second directory")
        logger.complete()
    finally:
        configure_logging()

    assert "only in the second" not in "".join(p.read_text(encoding="utf-8") for p in first.glob("*.log"))
    assert "only in the second directory" in next(second.glob("*.log")).read_text(encoding="utf-8")
