from pathlib import Path

import pytest

from basescan.core.memory import (
    STREAM_THRESHOLD_BYTES,
    iter_batches,
    process_batches,
    read_file_streaming,
    read_text_safely,
    should_stream,
)


def test_should_stream_only_above_threshold():
    assert not should_stream(STREAM_THRESHOLD_BYTES)
    assert should_stream(STREAM_THRESHOLD_BYTES + 1)
    assert should_stream(11, threshold=10)


def test_streaming_chunks_whole_lines(tmp_path: Path):
    p = tmp_path / "five.js"
    p.write_text("a\nb\nc\nd\ne\n", encoding="utf-8")
    seen = []
    read_file_streaming(p, lambda chunk, start: seen.append((chunk, start)), chunk_lines=2)
    assert seen == [("a\nb\n", 1), ("c\nd\n", 3), ("e\n", 5)]


def test_streaming_skips_blank_trailing_chunk(tmp_path: Path):
    p = tmp_path / "blank_tail.js"
    p.write_text("a\nb\n   \n", encoding="utf-8")
    seen = []
    read_file_streaming(p, lambda chunk, start: seen.append(start), chunk_lines=2)
    assert seen == [1]


def test_streaming_processor_error_stops_the_read(tmp_path: Path):
    p = tmp_path / "boom.js"
    p.write_text("\n".join(str(i) for i in range(10)), encoding="utf-8")
    calls = []

    def processor(chunk, start):
        calls.append(start)
        raise RuntimeError("stop")

    with pytest.raises(RuntimeError):
        read_file_streaming(p, processor, chunk_lines=3)
    assert calls == [1]


def test_process_batches_skips_failing_batch(caplog):
    def processor(batch):
        if 3 in batch:
            raise ValueError("bad batch")
        return [x * 10 for x in batch]

    results = process_batches(list(range(6)), processor, batch_size=2, delay=0)
    assert results == [0, 10, 40, 50]
    assert "Error processing batch 2-4" in caplog.text


def test_iter_batches_sizes():
    assert list(iter_batches([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]
    with pytest.raises(ValueError):
        list(iter_batches([1], 0))


def test_read_text_safely_refuses_binary(tmp_path: Path):
    p = tmp_path / "blob.js"
    p.write_bytes(b"\x00\x01\x02binary\x00")
    assert read_text_safely(p) is None


def test_read_text_safely_decodes_utf8(tmp_path: Path):
    p = tmp_path / "text.js"
    p.write_text("const greeting = 'héllo';\n", encoding="utf-8")
    assert read_text_safely(p) == "const greeting = 'héllo';\n"


def test_read_text_safely_propagates_missing_file(tmp_path: Path):
    with pytest.raises(OSError):
        read_text_safely(tmp_path / "missing.js")
