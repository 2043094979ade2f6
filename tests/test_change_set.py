from changescope.core.change_set import ChangeSet, directory_of, normalize_path


def test_from_paths_drops_blanks_and_duplicates():
    changes = ChangeSet.from_paths(["a/b.go", "", "  ", "a/b.go", "c.go\n"])
    assert changes.sorted() == ["a/b.go", "c.go"]
    assert len(changes) == 2


def test_normalize_path():
    assert normalize_path("./pkg/a.go") == "pkg/a.go"
    assert normalize_path("pkg\\sub\\a.go") == "pkg/sub/a.go"
    assert normalize_path(" . ") == ""


def test_directory_of_root_file_is_dot():
    assert directory_of("main.go") == "."
    assert directory_of("pkg/sub/a.go") == "pkg/sub"


def test_union_and_membership():
    merged = ChangeSet.from_paths(["a.go"]) | ChangeSet.from_paths(["b.go", "a.go"])
    assert "a.go" in merged
    assert "b.go" in merged
    assert sorted(merged) == ["a.go", "b.go"]
