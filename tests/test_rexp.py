import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from specvalidate.rexp import compile_regexp, must_compile_regexp


def test_compile_regexp():
    rex = compile_regexp(".*TestRegexp.*")
    assert isinstance(rex, re.Pattern)
    assert rex.match("xxTestRegexpyy")

    again = compile_regexp(".*TestRegexp.*")
    assert again is rex

    with pytest.raises(re.error):
        compile_regexp(".[*InvalidTestRegexp.*")


def test_must_compile_regexp():
    rex = must_compile_regexp(".*TestRegexp2.*")
    assert isinstance(rex, re.Pattern)
    assert must_compile_regexp(".*TestRegexp2.*") is rex

    with pytest.raises(re.error):
        must_compile_regexp(".[*InvalidTestRegexp.*")


@pytest.mark.parametrize("compiler", [compile_regexp, must_compile_regexp])
def test_race_compile(compiler):
    patterns = [".*TestRegexp1.*", ".*TestRegexp2.*", ".*TestRegexp3.*"]
    jobs = [patterns[i % 3] for i in range(20)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(compiler, jobs))
    for pattern, rex in zip(jobs, results):
        assert rex.pattern == pattern
        assert rex is compiler(pattern)