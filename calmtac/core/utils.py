def print_info(d, score, nodes, elapsed, move, WIN_SCORE):
        nps = int(nodes / elapsed) if elapsed > 0 else 0

        if abs(score) >= WIN_SCORE:
            # terminal scores carry the remaining depth, so plies = d - (|score| - WIN_SCORE)
            plies = d - (abs(score) - WIN_SCORE)
            score_str = f"win {plies}" if score > 0 else f"loss {plies}"
        else:
            score_str = f"cp {score}"

        print(f"info depth {d} score {score_str} nodes {nodes} nps {nps} time {int(elapsed * 1000)} move {move}")
