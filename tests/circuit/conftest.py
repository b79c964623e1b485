import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.circuit import Environment, Field, Mode


@pytest.fixture
def env():
    """테스트마다 새 회로 환경."""
    return Environment("test")


@pytest.fixture
def operands(env):
    """a = 0, b = 1 (Private) 피연산자."""
    a = Field.new(env, Mode.PRIVATE, 0)
    b = Field.new(env, Mode.PRIVATE, 1)
    return a, b
