from regcolor.allocators.graph.graph import (
    build_interference_graph, check_interference_graph, lex_bfs, perfect_elimination_order,
    is_chordal, max_clique_size, color, is_possible, Coloring,
    GraphColoringAllocator, BacktrackingGraphColoringAllocator)
