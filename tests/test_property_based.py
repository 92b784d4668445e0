from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from adi_parser.collector import EventRecorder, RecordCollector
from adi_parser.models import EventType
from adi_parser.parser import ADIParser, count_line_breaks

field_name_strategy = st.text(alphabet=string.ascii_uppercase + "_", min_size=1, max_size=16)
plain_field_name_strategy = field_name_strategy.filter(lambda name: name not in ("EOH", "EOR"))
value_strategy = st.text(max_size=40)


def _record_events(text: str) -> list:
    recorder = EventRecorder()
    assert ADIParser(text, recorder).parse() is True
    return recorder.events


@given(st.text(max_size=300))
def test_parse_is_deterministic(text: str):
    assert _record_events(text) == _record_events(text)


@given(st.text(max_size=300))
def test_document_is_always_started_and_ended(text: str):
    events = _record_events(text)

    assert events[0].type is EventType.START_DOCUMENT
    assert events[-1].type is EventType.END_DOCUMENT
    assert [event.type for event in events].count(EventType.START_DOCUMENT) == 1


@given(st.text(max_size=300))
def test_emitted_comments_contain_non_whitespace(text: str):
    for event in _record_events(text):
        if event.type is EventType.COMMENT:
            assert event.args[0].strip()


@given(st.text(max_size=300))
def test_line_numbers_never_decrease(text: str):
    line_numbers = [event.line_number for event in _record_events(text)]

    assert line_numbers[0] == 1
    assert line_numbers == sorted(line_numbers)


@given(st.text(alphabet=string.ascii_letters + string.digits + " .,;!?", max_size=100))
def test_text_without_angle_brackets_has_no_data_specifiers(text: str):
    types = {event.type for event in _record_events(text)}

    assert types == {EventType.START_DOCUMENT, EventType.END_DOCUMENT}


@given(st.lists(st.tuples(field_name_strategy, value_strategy), min_size=1, max_size=10))
def test_length_prefixed_values_round_trip(fields):
    text = "".join(
        f"<{name}:{len(value.encode('utf-8'))}>{value}\n" for name, value in fields
    )
    recorder = EventRecorder()
    parser = ADIParser(text, recorder)
    parser.parse()

    starts = [
        event.args[0]
        for event in recorder.events
        if event.type is EventType.START_DATA_SPECIFIER
    ]
    data = [event.args[0] for event in recorder.events if event.type is EventType.DATA]
    assert starts == [name for name, _ in fields]
    assert data == [value for _, value in fields if value]
    # Separators between tags count once each; the trailing one is never consumed
    expected_lines = len(fields) + sum(count_line_breaks(value) for _, value in fields)
    assert parser.line_number == expected_lines


@given(st.lists(st.tuples(plain_field_name_strategy, value_strategy), min_size=1, max_size=10))
def test_record_collector_gathers_one_record(fields):
    text = "".join(f"<{name}:{len(value.encode('utf-8'))}>{value}" for name, value in fields)
    collector = RecordCollector()
    ADIParser(text + "<EOR>", collector).parse()

    assert collector.document.records == [dict(fields)]
