"""Payment proof domain - References to uploaded proof-of-payment files"""
