"""
Pytest configuration and fixtures for lexparse tests.
"""

from pathlib import Path

import pytest

from lexparse.core.records import ParsedData
from lexparse.hierarchy import Flattener, TreeBuilder
from lexparse.hierarchy.tree import DocumentTree

SAMPLE_LINES = [
    "ГРАЖДАНСКИЙ КОДЕКС РЕСПУБЛИКИ КАЗАХСТАН",
    "",
    "ЧАСТЬ 1. Общая часть / Жалпы бөлім",
    "РАЗДЕЛ 1. Общие положения / Жалпы ережелер",
    "Глава 1. Основные начала / Негізгі бастаулар",
    "Статья 1. Задачи кодекса / Кодекстің міндеттері",
    "1) первая задача / бірінші міндет",
    "а) первый подпункт / бірінші тармақша",
    "б) второй подпункт / екінші тармақша",
    "2) вторая задача / екінші міндет",
    "Статья 2. Принципы / Қағидаттар",
    "Глава 2. Лица / Тұлғалар",
    "Параграф 1. Физические лица / Жеке тұлғалар",
    "Статья 1. Правоспособность / Құқық қабілеттілігі",
    "РАЗДЕЛ 2. Право собственности / Меншік құқығы",
    "Глава 3. Общие положения / Жалпы ережелер",
    "Статья 3. Содержание права / Құқықтың мазмұны",
]


@pytest.fixture
def sample_text() -> str:
    """A small code touching every level, with repeated article numbers."""
    return "\n".join(SAMPLE_LINES)


@pytest.fixture
def sample_tree(sample_text: str) -> DocumentTree:
    return TreeBuilder().build(sample_text, document_id="sample")


@pytest.fixture
def sample_data(sample_tree: DocumentTree) -> ParsedData:
    return Flattener.flatten(sample_tree)


@pytest.fixture
def sample_file(tmp_path: Path, sample_text: str) -> Path:
    """The sample text saved as a UTF-8 .txt file."""
    path = tmp_path / "code.txt"
    path.write_text(sample_text, encoding="utf-8")
    return path
