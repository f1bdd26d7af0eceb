"""A helper for writing code generators.
"""
import sys
import os

# Status for any failure, usage, file or input data.
EXIT_FAILURE = 1

def message(msg):
	"Print a message with no newline."
	print(msg, end='', file=sys.stderr)

def error(msg):
	"Print a message and exit with failure status."
	message(f"Error: {msg}\n")
	sys.exit(EXIT_FAILURE)

BANNER_RULE = '//' + '*' * 72

class Codegen:
	"""Class for doing much of the grunt work of emitting "C" code.

	The output file is opened (and so truncated) by open(), which should be called before any input is read so that an unwritable
	output is found early. Lines are collected with add() and written out by end(). If the generator fails before end() the output file
	is left empty, which the caller must treat as invalid.
	"""
	def __init__(self, infile, outfile):
		"""Initialise with input filename that the code is generated from; and the output file that will be overwritten.
		"""
		self.infile = infile
		self.outfile = outfile
		self.contents = []
		self.fout = None

	def open(self):
		"Open the output file for writing, raises OSError on failure."
		self.fout = open(self.outfile, 'wt', encoding='utf-8', newline='\n')	# pylint: disable=consider-using-with
		return self

	def add(self, stuff, add_nl=None):
		"""Add either a string that will be split into lines, or a list of lines to the contents of the output file.
			If add_nl is negative a newline will be added before the contents, if positive it will be added after. If zero then you get both."""
		if isinstance(stuff, str):
			stuff = stuff.splitlines()
		if add_nl is not None and add_nl <= 0:
			self.add_nl()
		self.contents += list(stuff)
		if add_nl is not None and add_nl >= 0:
			self.add_nl()

	def add_comment(self, comment, *args, **kwargs):
		"""Add a multiline string as a bunch of comments."""
		self.add(['//' + x for x in comment.splitlines()], *args, **kwargs)
	def add_nl(self):
		"Add a newline."
		self.contents.append('')

	def add_autogen_comment(self, tool, fields):
		"""Add the framed banner noting that the file was generated. Arg fields is a list of (label, value) pairs, one per line.
		"""
		self.add([BANNER_RULE, BANNER_RULE, '//***'])
		self.add_comment(f"***  NOTE:  This file was automatically generated by {tool}")
		width = max((len(label) for label, _ in fields), default=0) + 3	# Colon and two spaces.
		for label, value in fields:
			self.add_comment(f"***  {(label + ':').ljust(width)}{value}")
		self.add(['//***', BANNER_RULE, BANNER_RULE], add_nl=+1)

	def text(self):
		"Return the contents as they will be written."
		return ''.join(x + '\n' for x in self.contents)

	def end(self):
		"Finished generating, write the contents and close the output file."
		if self.fout is None:
			self.open()
		try:
			self.fout.write(self.text())
		finally:
			self.fout.close()
			self.fout = None
		message(f"Output file `{os.path.basename(self.outfile)}' written.\n")
