import json
import pytest
from pathlib import Path

from compdb.core.channel import PathChannel
from compdb.core.common.enums import AggregatorState
from compdb.features.merge_aggregator.data.output_stream import OutputStream
from compdb.features.merge_aggregator.service.aggregator import MergeAggregator


async def merge_paths(paths, output: Path):
    """
    Feeds `paths` through a channel in the given order and runs the aggregator.
    """
    channel = PathChannel(capacity=max(len(paths), 1))
    channel.open_sender()
    for path in paths:
        await channel.send(path)
    channel.close_sender()

    return await MergeAggregator(channel, OutputStream(output)).run()


@pytest.mark.asyncio
async def test_single_fragment(tmp_path, make_fragment):
    fragment = make_fragment(tmp_path / "a", b'[{"a":1}]')
    output = tmp_path / "out.json"

    summary = await merge_paths([fragment], output)

    assert output.read_bytes() == b'[{"a":1}]'
    assert summary.fragments_merged == 1
    assert summary.output_path == output


@pytest.mark.asyncio
@pytest.mark.parametrize("order", [(0, 1), (1, 0)])
async def test_two_fragments_in_either_order(tmp_path, make_fragment, order):
    fragments = [
        make_fragment(tmp_path / "a", b'[{"a":1}]'),
        make_fragment(tmp_path / "b", b'[{"b":2}]'),
    ]
    output = tmp_path / "out.json"

    await merge_paths([fragments[i] for i in order], output)

    data = output.read_bytes()
    assert data.count(b",") == 1
    assert sorted(json.loads(data), key=lambda e: sorted(e)) == [{"a": 1}, {"b": 2}]


@pytest.mark.asyncio
@pytest.mark.parametrize("empty_first", [True, False])
async def test_empty_fragment_adds_no_separator(tmp_path, make_fragment, empty_first):
    empty = make_fragment(tmp_path / "empty", b"[]")
    full = make_fragment(tmp_path / "full", b'[{"a":1}]')
    output = tmp_path / "out.json"

    paths = [empty, full] if empty_first else [full, empty]
    summary = await merge_paths(paths, output)

    assert output.read_bytes() == b'[{"a":1}]'
    assert summary.fragments_empty == 1
    assert summary.fragments_merged == 1


@pytest.mark.asyncio
async def test_no_fragments_yields_empty_array(tmp_path):
    output = tmp_path / "out.json"

    summary = await merge_paths([], output)

    assert output.read_bytes() == b"[]"
    assert summary.fragments_found == 0


@pytest.mark.asyncio
async def test_elements_are_copied_verbatim(tmp_path, make_fragment):
    raw = b'[\n  {"file": "a.c",   "arguments": ["cc", "-DX=\\"]\\""]},\n  {"file": "b.c"}\n]\n'
    fragment = make_fragment(tmp_path / "a", raw)
    output = tmp_path / "out.json"

    await merge_paths([fragment], output)

    assert output.read_bytes() == b"[" + raw[1:raw.rindex(b"]")] + b"]"
    assert len(json.loads(output.read_bytes())) == 2


@pytest.mark.asyncio
async def test_malformed_elements_pass_through(tmp_path, make_fragment):
    fragment = make_fragment(tmp_path / "a", b"[not json at all]")
    output = tmp_path / "out.json"

    await merge_paths([fragment], output)

    assert output.read_bytes() == b"[not json at all]"


@pytest.mark.asyncio
async def test_output_file_is_not_merged_into_itself(tmp_path, make_fragment):
    output = make_fragment(tmp_path, b'[{"stale":true}]')
    fragment = make_fragment(tmp_path / "mod", b'[{"a":1}]')

    summary = await merge_paths([output, fragment], output)

    assert output.read_bytes() == b'[{"a":1}]'
    assert summary.fragments_skipped == 1
    assert summary.fragments_found == 2


@pytest.mark.asyncio
async def test_unreadable_fragment_propagates(tmp_path):
    output = tmp_path / "out.json"

    with pytest.raises(FileNotFoundError):
        await merge_paths([tmp_path / "missing" / "compile_commands.json"], output)


def test_output_stream_state_machine(tmp_path):
    output = tmp_path / "out.json"
    stream = OutputStream(output)

    stream.open()
    assert stream.state is AggregatorState.AWAITING_FIRST_ELEMENT

    assert stream.write_fragment(b"") == 0
    assert stream.state is AggregatorState.AWAITING_FIRST_ELEMENT

    assert stream.write_fragment(b"1") == 1
    assert stream.state is AggregatorState.HAS_ELEMENTS

    # Separator counts towards bytes written
    assert stream.write_fragment(b"2") == 2

    stream.finish()
    assert stream.state is AggregatorState.CLOSED
    assert output.read_bytes() == b"[1,2]"
    assert stream.bytes_written == 5

    with pytest.raises(ValueError):
        stream.write_fragment(b"3")


def test_output_stream_truncates_existing_file(tmp_path):
    output = tmp_path / "out.json"
    output.write_bytes(b"x" * 100)

    stream = OutputStream(output)
    stream.open()
    stream.finish()

    assert output.read_bytes() == b"[]"
