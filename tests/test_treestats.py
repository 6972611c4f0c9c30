from morris.config import SearchConfig
from morris.game_basics import WHITE, deserialize_board
from morris.solver import SearchNode, iter_nodes, new_root, search
from morris.treestats import format_stats, tree_stats


def test_depth_one_tree():
    root = search(new_root(WHITE), WHITE, SearchConfig(max_depth=1))
    s = tree_stats(root)
    assert s['nodes'] == 10
    assert s['leaves'] == 9
    assert s['expanded'] == 1
    assert s['nodes_per_depth'] == [1, 9]
    assert s['mean_branching'] == 9.0
    assert s['cutoff_nodes'] == 0
    assert s['white_wins'] == 0 and s['black_wins'] == 0
    assert s['max_depth'] == 1
    assert s['root_value'] == 4


def test_counts_are_consistent():
    root = search(new_root(WHITE), WHITE, SearchConfig(max_depth=4))
    s = tree_stats(root)
    assert s['nodes'] == len(list(iter_nodes(root)))
    assert sum(s['nodes_per_depth']) == s['nodes']
    assert s['leaves'] + s['expanded'] == s['nodes']
    assert s['cutoff_nodes'] > 0


def test_unpruned_tree_has_no_cutoffs():
    root = search(new_root(WHITE), WHITE, SearchConfig(max_depth=3, prune=False))
    assert tree_stats(root)['cutoff_nodes'] == 0


def test_wins_are_counted():
    root = search(SearchNode(board=deserialize_board("110220000"), turn=WHITE),
                  config=SearchConfig(max_depth=2))
    s = tree_stats(root)
    assert s['white_wins'] >= 1
    assert "white_wins=" in format_stats(s)
