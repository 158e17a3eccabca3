import numpy as np
import pytest

from cells3d.common.random_source import BernoulliSource
from cells3d.dsu.link_policy import FixedLinkPolicy, LinkPolicy, RandomLinkPolicy


def test_fill_equals_successive_calls_across_block_boundaries():
    a = BernoulliSource(seed=11, p=0.3, block_size=16)
    b = BernoulliSource(seed=11, p=0.3, block_size=16)

    mixed = [a() for _ in range(5)] + a.fill(40).tolist() + [a() for _ in range(3)]
    calls = [b() for _ in range(48)]
    assert mixed == calls


def test_same_seed_same_stream():
    assert BernoulliSource(seed=5).fill(1000).tolist() == BernoulliSource(seed=5).fill(1000).tolist()
    assert BernoulliSource(seed=5).fill(1000).tolist() != BernoulliSource(seed=6).fill(1000).tolist()


def test_extreme_probabilities():
    assert not BernoulliSource(p=0.0).fill(500).any()
    assert BernoulliSource(p=1.0).fill(500).all()


def test_bias_is_roughly_respected():
    draws = BernoulliSource(seed=2, p=0.25).fill(20000)
    assert 0.22 < draws.mean() < 0.28


def test_invalid_arguments():
    with pytest.raises(ValueError):
        BernoulliSource(p=1.5)
    with pytest.raises(ValueError):
        BernoulliSource(block_size=0)
    with pytest.raises(ValueError):
        BernoulliSource().fill(-1)


def test_calls_return_python_bools():
    value = BernoulliSource(seed=1)()
    assert isinstance(value, bool)


def test_link_policies():
    fixed = FixedLinkPolicy(True)
    assert fixed.flip() is True
    assert fixed.draw(4).tolist() == [True] * 4
    assert isinstance(fixed, LinkPolicy)

    rnd = RandomLinkPolicy(seed=9)
    assert isinstance(rnd, LinkPolicy)
    again = RandomLinkPolicy(seed=9)
    assert [rnd.flip() for _ in range(10)] + rnd.draw(10).tolist() == again.draw(20).tolist()
    assert rnd.draw(0).dtype == np.bool_
