import pytest

from assocarray.datastructures import AssociativeArray


@pytest.fixture
def empty():
    return AssociativeArray()


@pytest.fixture
def abc():
    aa = AssociativeArray()
    aa.set("a", 1)
    aa.set("b", 2)
    aa.set("c", 3)
    return aa
