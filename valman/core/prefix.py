def makeregprefix(key):
    regstr = [".","+","*","?","|","^","$","(",")","[","]","{","}","\\",]
    out = ""
    for ch in key:
        out += r"\{}".format(ch) if ch in regstr else ch
    return out
ASSIGN_MARKER = "||"
COMMENT_PREFIX = "#"
