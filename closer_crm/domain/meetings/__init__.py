"""Meeting domain - Meeting records of a Closer, optionally tied to a client"""
