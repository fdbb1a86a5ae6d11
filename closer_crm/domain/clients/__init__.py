"""Client domain - Client records owned by a Closer"""
