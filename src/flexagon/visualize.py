"""
Plots of search results, saved as PNG files under renders/.
"""

import os

import matplotlib.pyplot as plt
import networkx as nx

from flexagon.analysis import group_by_structure

RENDERS_DIR = "renders"
PLOT_COLORS = ["lightblue", "salmon", "palegreen", "khaki", "plum", "lightgray", "peachpuff", "aquamarine"]


def _next_render_path(renders_dir: str, prefix: str) -> str:
    os.makedirs(renders_dir, exist_ok=True)
    existing_files = [f for f in os.listdir(renders_dir) if f.endswith(".png")]
    return os.path.join(renders_dir, f"{prefix}_{len(existing_files)}.png")


def plot_state_graph(explore, renders_dir=RENDERS_DIR, with_labels=True) -> str:
    """
    Draw the explored state graph, one node per state, coloured by structure class.
    Returns the path of the saved image.
    """
    graph = explore.to_graph()
    colors = ["white"] * graph.number_of_nodes()
    for group, members in enumerate(group_by_structure(explore.get_flexagons())):
        for i in members:
            colors[i] = PLOT_COLORS[group % len(PLOT_COLORS)]

    fig, ax = plt.subplots(figsize=(10, 10))
    pos = nx.spring_layout(graph, seed=0)
    nx.draw(graph, pos, with_labels=with_labels, node_color=colors, edge_color="gray", ax=ax)
    ax.set_title(f"{graph.number_of_nodes()} states, {explore.get_explored_count()} explored")
    ax.axis("off")

    filepath = _next_render_path(renders_dir, "state_graph")
    plt.tight_layout(pad=0)
    plt.savefig(filepath)
    plt.close(fig)
    print(f"Saved render to {filepath}")
    return filepath


def plot_cayley_table(group_table, renders_dir=RENDERS_DIR) -> str:
    """Draw a GroupTable as a colour-coded grid with element labels. Returns the image path."""
    labels = group_table.get_labels()
    n = len(labels)
    fig, ax = plt.subplots(figsize=(max(4, n * 0.6), max(4, n * 0.6)))
    ax.imshow(group_table.table, cmap="tab20")
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(labels, rotation=90)
    ax.set_yticklabels(labels)
    for i in range(n):
        for j in range(n):
            ax.text(j, i, labels[group_table.table[i, j]], ha="center", va="center", fontsize=8)
    ax.set_title(" ".join(group_table.generators))

    filepath = _next_render_path(renders_dir, "cayley_table")
    plt.tight_layout()
    plt.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved render to {filepath}")
    return filepath
