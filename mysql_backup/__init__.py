"""MySQL backup orchestration: dumps, binary snapshots, CURRENT pointer and retention."""
