"""MCP Server for navigating and selecting the heading tree of Jupyter notebooks."""

import asyncio
import json
import logging
import os
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .tools.select_cells import select_subtree as do_select_subtree, select_siblings as do_select_siblings
from .tools.goto_cell import (
    goto_parent_cell as do_goto_parent_cell,
    goto_forward_and_up as do_goto_forward_and_up,
    goto_backward_and_up as do_goto_backward_and_up,
    goto_forward_and_over as do_goto_forward_and_over,
    goto_next_breadth_first as do_goto_next_breadth_first,
    goto_next_depth_first as do_goto_next_depth_first,
)
from .tools.get_outline import get_outline as do_get_outline, get_cell_tree as do_get_cell_tree
from .tools.edit_headings import (
    increment_heading as do_increment_heading,
    insert_heading_below as do_insert_heading_below,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "NBSUBTREE_LOG_LEVEL"


# Create MCP server
server = Server("nbsubtree-mcp")


def _selection_schema(description: str, extra: Optional[dict] = None) -> dict:
    """Input schema shared by every tool that acts on the current selection."""
    properties = {
        "path": {
            "type": "string",
            "description": "Path to the .ipynb notebook",
        },
        "selection_start": {
            "type": "integer",
            "description": f"Index of the first selected cell. {description}",
        },
        "selection_end": {
            "type": "integer",
            "description": "End of the selection, exclusive (default: selection_start + 1)",
        },
    }
    if extra:
        properties.update(extra)
    return {
        "type": "object",
        "properties": properties,
        "required": ["path", "selection_start"],
    }


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="select_subtree",
            description="""Select the selected cell and every cell nested under it.

A headline cell owns every following cell up to the next headline of the
same or a shallower heading level. Non-headline cells have no subtree.

Returns the new selection as {start, end} with end exclusive, or
selection: null if nothing changed.""",
            inputSchema=_selection_schema("The subtree of this cell is selected."),
        ),
        Tool(
            name="select_siblings",
            description="""Select the siblings of the selected cell.

By default selects from the first sibling through the end of the selected
cell's own subtree. Set include_following to extend the selection through
the last sibling's subtree.""",
            inputSchema=_selection_schema(
                "Siblings of this cell are selected.",
                {
                    "include_following": {
                        "type": "boolean",
                        "description": "Also select the siblings after the selected cell",
                        "default": False,
                    },
                },
            ),
        ),
        Tool(
            name="goto_parent_cell",
            description="""Move the selection to the headline cell enclosing the selected cell.

No-op for cells that are not nested under any headline.""",
            inputSchema=_selection_schema("Navigation starts from this cell."),
        ),
        Tool(
            name="goto_forward_and_up",
            description="""Move the selection to the next cell in document order.

Descends into the selected cell's children first, then moves on to the
next sibling, climbing out of finished sections.""",
            inputSchema=_selection_schema("Navigation starts from this cell."),
        ),
        Tool(
            name="goto_backward_and_up",
            description="""Move the selection to the previous cell in document order.

Enters the end of the previous sibling's subtree, or climbs to the
enclosing headline when there is no previous sibling.""",
            inputSchema=_selection_schema("Navigation starts from this cell."),
        ),
        Tool(
            name="goto_forward_and_over",
            description="""Move the selection to the next sibling, skipping the selected cell's subtree.

Climbs out of finished sections when the selected cell is the last sibling.""",
            inputSchema=_selection_schema("Navigation starts from this cell."),
        ),
        Tool(
            name="goto_next_breadth_first",
            description="""Move the selection to the next cell of a breadth-first walk of the selected subtree.""",
            inputSchema=_selection_schema("Navigation starts from this cell."),
        ),
        Tool(
            name="goto_next_depth_first",
            description="""Move the selection to the next cell of a depth-first walk of the selected subtree.""",
            inputSchema=_selection_schema("Navigation starts from this cell."),
        ),
        Tool(
            name="get_outline",
            description="""Get the heading outline of a notebook as a nested tree.

Every cell appears once, nested under the headline cell that owns it.
Useful for understanding a notebook's structure before navigating it.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the .ipynb notebook",
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Only expand nodes with tree depth below this value",
                    },
                    "headlines_only": {
                        "type": "boolean",
                        "description": "Only include headline cells",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="get_cell_tree",
            description="""Get where one cell sits in the notebook's heading tree.

Returns its depth, enclosing headlines, children and subtree range.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the .ipynb notebook",
                    },
                    "cell": {
                        "type": "integer",
                        "description": "Cell index",
                    },
                },
                "required": ["path", "cell"],
            },
        ),
        Tool(
            name="increment_heading",
            description="""Change the heading level of every selected headline cell.

Non-headline cells in the selection are left untouched. Levels are clamped
to 1..6. Writes the notebook file. Blocked in read-only mode
(NBSUBTREE_READ_ONLY=true).""",
            inputSchema=_selection_schema(
                "Headline cells in the selection are rewritten.",
                {
                    "change": {
                        "type": "integer",
                        "description": "Levels to add; negative values promote headings",
                        "default": 1,
                    },
                },
            ),
        ),
        Tool(
            name="insert_heading_below",
            description="""Insert an empty heading cell below the selected cell.

The heading is one level below the headline enclosing the insertion point.
Writes the notebook file. Blocked in read-only mode (NBSUBTREE_READ_ONLY=true).""",
            inputSchema=_selection_schema("The heading is inserted below this cell."),
        ),
    ]


_SELECTION_TOOLS = {
    "select_subtree": do_select_subtree,
    "goto_parent_cell": do_goto_parent_cell,
    "goto_forward_and_up": do_goto_forward_and_up,
    "goto_backward_and_up": do_goto_backward_and_up,
    "goto_forward_and_over": do_goto_forward_and_over,
    "goto_next_breadth_first": do_goto_next_breadth_first,
    "goto_next_depth_first": do_goto_next_depth_first,
    "insert_heading_below": do_insert_heading_below,
}


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name in _SELECTION_TOOLS:
            result = _SELECTION_TOOLS[name](
                path=arguments["path"],
                selection_start=arguments.get("selection_start"),
                selection_end=arguments.get("selection_end"),
            )
        elif name == "select_siblings":
            result = do_select_siblings(
                path=arguments["path"],
                selection_start=arguments.get("selection_start"),
                selection_end=arguments.get("selection_end"),
                include_following=arguments.get("include_following", False),
            )
        elif name == "increment_heading":
            result = do_increment_heading(
                path=arguments["path"],
                selection_start=arguments.get("selection_start"),
                selection_end=arguments.get("selection_end"),
                change=arguments.get("change", 1),
            )
        elif name == "get_outline":
            result = do_get_outline(
                path=arguments["path"],
                max_depth=arguments.get("max_depth"),
                headlines_only=arguments.get("headlines_only", False),
            )
        elif name == "get_cell_tree":
            result = do_get_cell_tree(
                path=arguments["path"],
                cell=arguments["cell"],
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e)
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    # stdout carries the MCP stream
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
