from src.application.use_cases.registry import COMMAND_TYPES, QUERY_TYPES


def test_every_message_has_a_handler(dispatcher):
    assert dispatcher.command_types == frozenset(COMMAND_TYPES)
    assert dispatcher.query_types == frozenset(QUERY_TYPES)


def test_catalogue_size():
    assert len(set(COMMAND_TYPES)) == len(COMMAND_TYPES) == 35
    assert len(set(QUERY_TYPES)) == len(QUERY_TYPES) == 15
