"""State layer.

Everything that knows how a state tree is addressed and compared lives
here: change classification, state-change listener names, and the path
differ the dispatch engine runs after every state replacement.
"""
