import pytest

from c4.filemode import (
    OS_GROUP_R,
    OS_GROUP_RWX,
    OS_GROUP_X,
    OS_OTH_R,
    OS_OTH_RWX,
    OS_OTH_X,
    OS_USER_RW,
    OS_USER_RWX,
    FileMode,
    format_file_mode,
    is_dir,
    parse_file_mode,
)


def test_parse_regular_file():
    mode = parse_file_mode("-rw-r--r--")
    assert mode == OS_USER_RW | OS_GROUP_R | OS_OTH_R
    assert not is_dir(mode)


def test_parse_directory():
    mode = parse_file_mode("drwxr-xr-x")
    assert mode == FileMode.DIR | OS_USER_RWX | OS_GROUP_R | OS_GROUP_X | OS_OTH_R | OS_OTH_X
    assert is_dir(mode)


@pytest.mark.parametrize(
    "text",
    ["-rw-r--r--", "drwxr-xr-x", "-rwxrwxrwx", "----------", "drwx------", "-r--r--r--"],
)
def test_round_trip(text):
    assert format_file_mode(parse_file_mode(text)) == text


def test_parse_is_case_insensitive():
    assert parse_file_mode("-RW-R--R--") == parse_file_mode("-rw-r--r--")
    assert parse_file_mode("DRWXR-XR-X") == parse_file_mode("drwxr-xr-x")


def test_upper_case_l_reads_as_exclusive():
    mode = parse_file_mode("Lrwxrwxrwx")
    assert mode == FileMode.EXCLUSIVE | OS_USER_RWX | OS_GROUP_RWX | OS_OTH_RWX


def test_too_short_raises():
    with pytest.raises(ValueError):
        parse_file_mode("-rw-r--r-")


def test_extra_text_after_ten_characters_is_ignored():
    assert parse_file_mode("-rw-r--r--extra") == parse_file_mode("-rw-r--r--")


def test_format_full_permissions():
    assert format_file_mode(OS_USER_RWX | OS_GROUP_RWX | OS_OTH_RWX) == "-rwxrwxrwx"


def test_format_symlink():
    mode = FileMode.SYMLINK | OS_USER_RWX | OS_GROUP_RWX | OS_OTH_RWX
    assert format_file_mode(mode) == "Lrwxrwxrwx"


def test_format_several_type_bits():
    mode = FileMode.DIR | FileMode.STICKY | OS_USER_RWX
    text = format_file_mode(mode)
    assert text.startswith("dt")
    assert text.endswith("rwx------")


def test_is_dir_on_plain_int():
    assert is_dir(int(FileMode.DIR))
    assert not is_dir(OS_USER_RWX)