from tgkernel.fs_types import Stat, StatMode


def test_new_stat_is_zeroed():
    st = Stat()
    assert (st.st_dev, st.st_ino, st.st_mode, st.st_nlink, st.st_size) == (0, 0, 0, 0, 0)


def test_directory_mode():
    st = Stat(st_mode=StatMode.S_IFDIR | StatMode.DEFAULT_DIR_PERM)
    assert st.st_mode == 0o040755
    assert st.is_dir() is True
    assert st.is_file() is False


def test_regular_file_mode():
    st = Stat(st_mode=StatMode.S_IFREG | StatMode.DEFAULT_FILE_PERM, st_size=12)
    assert st.st_mode == 0o100644
    assert st.is_file() is True
    assert st.is_dir() is False


def test_literal_modes_classify():
    assert Stat(st_mode=0o100000).is_file() is True
    assert Stat(st_mode=0o040000).is_dir() is True


def test_empty_mode_is_neither():
    st = Stat()
    assert st.is_file() is False
    assert st.is_dir() is False