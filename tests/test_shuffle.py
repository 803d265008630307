from blockfield.rng import shuffle

def test_shuffle_is_permutation():
    seq = list(range(50)) + [7, 7, 7]
    out = shuffle(seq, 42)
    assert sorted(out) == sorted(seq)
    assert len(out) == len(seq)

def test_shuffle_reproducible_and_non_mutating():
    seq = [chr(ord('a') + i) for i in range(26)]
    before = list(seq)
    assert shuffle(seq, 1234) == shuffle(seq, 1234)
    assert seq == before

def test_shuffle_depends_on_seed():
    seq = list(range(30))
    assert shuffle(seq, 1) != shuffle(seq, 2)
    assert shuffle(seq, 1) != seq

def test_short_sequences_are_noops():
    assert shuffle([], 5) == []
    assert shuffle(["only"], 5) == ["only"]

def test_shuffle_accepts_tuples():
    assert sorted(shuffle((3, 1, 2), 9)) == [1, 2, 3]
