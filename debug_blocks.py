"""Dump scanned blocks, gaps and clusters for a saved chat response."""
import sys

from pair_parser.block_scanner import scan_blocks
from pair_parser.clusterer import BlockClusterer, gap_lines, is_significant_gap
from pair_parser.engine import load_chat_text
from pair_parser.models import BlockKind

path = sys.argv[1] if len(sys.argv) > 1 else "chat-response.json"
content = load_chat_text(path)

blocks = scan_blocks(content)
print(f"--- {len(blocks)} blocks in {path} ({len(content)} chars) ---")

prev = None
for b in blocks:
    if prev is not None:
        gap = content[prev.end:b.start]
        lines = gap_lines(gap)
        flag = "SPLIT" if is_significant_gap(gap) else "keep"
        print(f"    gap: {len(lines)} lines, {sum(len(l) for l in lines)} chars -> {flag}")
    print(f"  {b.kind.value:<16} {b.start:>6}-{b.end:<6} {b.content[:40]!r}")
    prev = b

clusters = BlockClusterer().cluster(content, blocks)
print(f"\n--- {len(clusters)} clusters ---")
for i, c in enumerate(clusters):
    kinds = ", ".join(b.kind.value for b in c.blocks)
    print(f"  [{i}] {c.start}-{c.end}: {kinds}")
    title = c.latest(BlockKind.TITLE)
    if title is not None:
        print(f"      last title: {title[:40]!r}")
