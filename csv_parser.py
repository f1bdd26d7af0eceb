""" Simple parser for the comma-delimited files exported from a spreadsheet, as used for input to code generation.
	Provides a base class CSVparse that must be subclassed for an actual parser.
"""

import re

class CSVparseError(Exception):
	"Exception raised by CSVparse parser and subclasses."
	pass

class MalformedFieldError(CSVparseError):
	"A field that must hold a number could not be read as one. The whole run is invalid."
	def __init__(self, filename, lineno, field_index, text):
		self.filename = filename
		self.lineno = lineno
		self.field_index = field_index
		self.text = text
		super().__init__(f"{filename}: line {lineno}, field {field_index}, string `{text}'")

class SkipRow(Exception):
	"Raised by a validator to discard the current row without error. Remaining fields are not examined."
	pass

def scan_int(text):
	"""Read a leading decimal integer like C's sscanf("%d"): leading whitespace and a sign are allowed and anything after the digits is
		ignored. Raises ValueError if there are no digits."""
	m = re.match(r'\s*([-+]?\d+)', text, re.ASCII)
	if not m:
		raise ValueError(f"not a number: `{text}'")
	return int(m.group(1))

def strip_quotes(field):
	"""Remove a single leading and a single trailing double quote character if present. A lone `"' is removed as a leading quote."""
	if len(field) > 1 and field.endswith('"'):
		field = field[:-1]
	if field.startswith('"'):
		field = field[1:]
	return field

def split_fields(line, count):
	"""Split a line at every comma into exactly `count' fields, padding with empty fields or ignoring extra ones.
		Quotes are not honoured, so a quoted field containing a comma becomes two fields. Spreadsheets only quote text cells, and
		the text cells in a pin list never contain commas."""
	fields = line.split(',')[:count]
	return fields + [''] * (count - len(fields))

def split_lines(text):
	"""Split text into lines at `\\n' only, removing any `\\r'. Other control characters, like a form feed in a text cell, stay in the line."""
	lines = text.split('\n')
	if lines and not lines[-1]:		# Text ends with a newline.
		lines.pop()
	return [line.rstrip('\r') for line in lines]

def find_end(lines, sentinel):
	"""Return the line number of the first line after the header starting with `sentinel', or None."""
	for lineno, line in enumerate(lines[1:], start=2):
		if line.startswith(sentinel):
			return lineno
	return None

class CSVparse:
	"""Base class to build a parser for a CSV file exported from a spreadsheet.

	The first line of the file is a header and is never read for data. Each following line is split by split_fields() into
	len(COLUMN_NAMES) positional fields, until a line starting with END_SENTINEL, which stops the scan; any lines after it are never read.
	A data line that is empty or only whitespace has no fields at all and is malformed.

	Each row starts as a copy of the DEFAULTS dict. Then for each column, left to right:
	  A field that is empty is not examined at all, the row keeps the default value.
	  Otherwise the field has a single leading and trailing double quote stripped, then is passed to the method
	    `validate_col_<column name>', if there is one. The method returns the new value, or None to keep the default. If it raises
	    ValueError the row is malformed, and MalformedFieldError is raised with the line number, column index & field text. If it
	    raises SkipRow the row is dropped without error and the rest of the row is not examined.
	  Finally the row dict is passed to handle_row(), which by default appends it to the `data' attribute. If handle_row() returns False
	  the scan stops.
	"""

	# Set names for all columns. Any extra columns in input are ignored.
	COLUMN_NAMES = ()	# pylint: disable=invalid-name
	# Default value for each column if the field is empty or the validator does not supply one.
	DEFAULTS = {}		# pylint: disable=invalid-name
	# A line starting with this string ends the data.
	END_SENTINEL = 'END'	# pylint: disable=invalid-name

	def __init__(self):
		"""Sets up a new parser, must be called by subclasses if they have an __init__() method.
			HINT: use `super().__init__(...)'."""
		self.filename = None	# Filename being read from.
		self.lineno = 0			# The current line being read, counting the header as line 1.
		self.end_lineno = None	# Line number of the END sentinel if one was seen.
		self.data = []			# Data from each accepted row ends up here, unless handle_row() is overridden.

	def handle_row(self, row):
		"""Override to do something with an accepted row. Return False to stop reading."""
		self.data.append(row)
		return True

	def parse_row(self, fields):
		"""Turn a list of raw fields into a dict keyed by COLUMN_NAMES, or None if the row is to be skipped."""
		row = dict(self.DEFAULTS)
		for c_idx, c_name in enumerate(self.COLUMN_NAMES):
			raw = fields[c_idx]
			if not raw: continue		# Empty fields are never parsed.
			field = strip_quotes(raw)
			validator = getattr(self, 'validate_col_' + c_name, None)
			if validator is None: continue		# No validator.
			try:
				value = validator(field)
			except SkipRow:
				return None
			except ValueError as exc:
				raise MalformedFieldError(self.filename, self.lineno, c_idx, field) from exc
			if value is not None:
				row[c_name] = value
		return row

	def read(self, fp_or_fn):
		"""Read a CSV file from a filename, a file object or a list of lines and parse it. Details in the class doc."""
		if isinstance(fp_or_fn, str):
			self.filename = fp_or_fn
			with open(fp_or_fn, 'rt', encoding='utf-8-sig', errors='replace', newline='') as csvfile:
				return self.read(split_lines(csvfile.read()))
		if self.filename is None:
			self.filename = getattr(fp_or_fn, 'name', '<none>')

		lines = [line.rstrip('\r\n') for line in fp_or_fn]
		self.end_lineno = find_end(lines, self.END_SENTINEL)
		last = len(lines) if self.end_lineno is None else self.end_lineno - 1
		self.lineno = min(len(lines), 1)		# Header is skipped unread.
		for self.lineno, line in enumerate(lines[1:last], start=2):
			if not line.strip():				# No fields at all, so no ITEM number.
				raise MalformedFieldError(self.filename, self.lineno, 0, '')
			row = self.parse_row(split_fields(line, len(self.COLUMN_NAMES)))
			if row is not None and not self.handle_row(row):
				break
		return self.data
