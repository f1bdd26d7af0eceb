"""Helpers shared by the tests."""

import pindefs

HEADER = '"ITEM","P176x","PORT","BIT","FUNC1","FUNC2","FUNC3","SIGNAME","FUNC","IN/OUT","MODE","OD","DEF","ACT"'

def make_pin(signame='LED', port=0, bit=0, seq=0, **kwargs):
	"Make a PinDefinition with sensible defaults for anything not given."
	fields = dict(pinnum=1, altfunc1='', altfunc2='', altfunc3='', func=None, inout=None)
	fields.update(kwargs)
	return pindefs.PinDefinition(seq=seq, port=port, bit=bit, signame=signame, **fields)
