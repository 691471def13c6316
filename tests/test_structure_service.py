# File: tests/test_structure_service.py
"""
Test the app's structure service (generation requests and data tables).
"""

from climbframe.generative import MAX_PIPE_COUNT
from services import StructureService


def test_generate_frames_clamps():
    pipes, budget = StructureService.generate_frames("-3", "12")

    assert budget.count_20cm == 0
    assert budget.boxes == 1
    assert len(pipes) == 12


def test_generate_frames_caps_counts():
    pipes, budget = StructureService.generate_frames(0, MAX_PIPE_COUNT * 50)

    assert budget.count_40cm == MAX_PIPE_COUNT
    assert len(pipes) == MAX_PIPE_COUNT // 12 * 12


def test_tables():
    """
    The pipe table has a row per pipe and the node table a row per node.
    """
    pipes = StructureService.generate_scaffold()
    pipes_df = StructureService.pipes_table(pipes)
    nodes_df = StructureService.nodes_table(pipes)

    assert len(pipes_df) == 96
    assert set(pipes_df['length_cm']) == {40}
    assert (nodes_df['degree'] >= 1).all()
    assert set(nodes_df['connector']) <= {'free', 'two_way', 'three_way', 'four_way'}


def test_empty_tables_have_columns():
    assert list(StructureService.pipes_table(()).columns) == ['id', 'length_cm', 'axis', 'start', 'end']
    assert len(StructureService.nodes_table(())) == 1  # origin


def test_config_input_limit_matches_engine():
    from config import CONFIG, AppConfig

    assert CONFIG.max_pipe_count == MAX_PIPE_COUNT
    assert 'default_length_units' not in AppConfig.__dataclass_fields__
