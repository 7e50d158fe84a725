"""High-level solver interfaces binding a ReactionGraph to the path algorithms.

The wrappers check the reserved source and sink vertices, run the algorithm
modules and convert the resulting paths to name-based result records. They
never mutate the input graph.
"""
