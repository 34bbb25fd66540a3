from glint.domain import StatusSnapshot
from glint.status_parser import parse_porcelain_status


def test_parse_branch_headers_and_entry_counts():
    raw = """\
# branch.oid 1234567890abcdef1234567890abcdef12345678
# branch.head main
# branch.upstream origin/main
# branch.ab +2 -1
1 M. N... 100644 100644 100644 aaaaaaa bbbbbbb staged.py
1 .M N... 100644 100644 100644 aaaaaaa aaaaaaa unstaged.py
1 MM N... 100644 100644 100644 aaaaaaa bbbbbbb both.py
1 A. N... 000000 100644 100644 0000000 bbbbbbb new.py
1 D. N... 100644 000000 000000 aaaaaaa 0000000 gone.py
1 .D N... 100644 100644 000000 aaaaaaa aaaaaaa missing.py
2 R. N... 100644 100644 100644 aaaaaaa aaaaaaa R100 new_name.py\told_name.py
u UU N... 100644 100644 100644 100644 aaaaaaa bbbbbbb ccccccc conflict.py
? untracked.txt
? other.txt
! ignored.txt
"""
    snapshot = parse_porcelain_status(raw, stashed=4)
    assert snapshot == StatusSnapshot(
        branch="main",
        upstream="origin/main",
        ahead=2,
        behind=1,
        staged_added=1,
        staged_modified=2,
        staged_renamed=1,
        staged_deleted=1,
        unstaged_modified=2,
        unstaged_deleted=1,
        untracked=2,
        unmerged=1,
        stashed=4,
    )


def test_detached_head_uses_short_commit_id():
    raw = """\
# branch.oid abcdef0123456789abcdef0123456789abcdef01
# branch.head (detached)
"""
    snapshot = parse_porcelain_status(raw)
    assert snapshot.branch == "abcdef01"
    assert snapshot.upstream is None


def test_repository_without_commits():
    assert parse_porcelain_status("# branch.oid (initial)\n# branch.head main\n").branch == "main"

    detached = "# branch.oid (initial)\n# branch.head (detached)\n"
    assert parse_porcelain_status(detached).branch == "HEAD"


def test_upstream_without_ahead_behind_header():
    # git omits branch.ab when the upstream branch no longer exists.
    raw = "# branch.oid abc\n# branch.head feature\n# branch.upstream origin/feature\n"
    snapshot = parse_porcelain_status(raw)
    assert snapshot.upstream == "origin/feature"
    assert (snapshot.ahead, snapshot.behind) == (0, 0)


def test_empty_output():
    assert parse_porcelain_status("") == StatusSnapshot(branch="HEAD")
