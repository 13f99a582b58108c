import sys
sys.path.insert(0, 'src')
from nbsubtree_mcp.tools.get_outline import get_outline
from nbsubtree_mcp.tools.select_cells import select_subtree
from nbsubtree_mcp.tools.goto_cell import goto_forward_and_over


def print_outline(entries, indent=0):
    for entry in entries:
        marker = '#' * entry['level'] if entry['headline'] else '-'
        print(f"{'  ' * indent}[{entry['index']}] {marker} {entry['title']}")
        print_outline(entry['children'], indent + 1)


def demo(path):
    print('=== Outline ===')
    result = get_outline(path, headlines_only=True)
    if 'error' in result:
        print(f"Error: {result['error']}")
        return
    print(f"Cells: {result['cell_count']}")
    print_outline(result['outline'])

    print('\n=== Top-level sections ===')
    current = 0
    while True:
        section = select_subtree(path, current)
        print(f"Section at {current}: cells {section['selection']}")
        step = goto_forward_and_over(path, current)
        if step['selection'] is None:
            break
        current = step['selection']['start']


if len(sys.argv) < 2:
    print('usage: python demo_mcp.py NOTEBOOK.ipynb')
    sys.exit(1)

demo(sys.argv[1])
