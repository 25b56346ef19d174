from hcc.flags import Flags


def test_set_and_has():
    flags = Flags()
    assert not flags.has_flag(3)
    flags.set_flag(3)
    assert flags.has_flag(3)
    assert 3 in flags


def test_unset_reports_presence():
    flags = Flags()
    flags.set_flag("a")
    assert flags.unset_flag("a") is True
    assert flags.unset_flag("a") is False
    assert not flags.has_flag("a")


def test_duplicates_need_two_unsets():
    flags = Flags()
    flags.set_flag(1)
    flags.set_flag(1)
    assert len(flags) == 2
    flags.unset_flag(1)
    assert flags.has_flag(1)
    flags.unset_flag(1)
    assert not flags.has_flag(1)


def test_flip_toggles():
    flags = Flags()
    flags.flip_flag(7)
    assert flags.has_flag(7)
    flags.flip_flag(7)
    assert not flags.has_flag(7)


def test_initial_values_preserve_order():
    flags = Flags(2, 1, 2)
    assert list(flags) == [2, 1, 2]