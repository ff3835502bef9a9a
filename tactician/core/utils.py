from typing import Mapping, List, Optional

import chess


def format_info(depth, score, nodes, elapsed, best_move, q_nodes=0, cutoffs=0):
    best_str = best_move.uci() if best_move else "-"
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    score_str = f"cp {score}" if score is not None else "cp -"
    return (f"info depth {depth} score {score_str} nodes {nodes} qnodes {q_nodes} "
            f"cutoffs {cutoffs} nps {nps} time {int(elapsed * 1000)} bestmove {best_str}")


def format_counts(counts: Mapping[int, List[int]]) -> str:
    # e.g. "N 2/2 B 2/1 R 2/2 Q 1/0"
    return " ".join(
        f"{chess.piece_symbol(pt).upper()} {w}/{b}" for pt, (w, b) in sorted(counts.items())
    )


def format_move_log(player: str, san: Optional[str], score, counts: Mapping[int, List[int]]) -> str:
    return f"{player}: {san or '-'} | eval {score} | counts {format_counts(counts)}"
