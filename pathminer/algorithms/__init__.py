"""Path algorithms over ReactionGraph: shortest paths, k-shortest paths,
null-score sampling, significance and scope."""
