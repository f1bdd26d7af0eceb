"""Pin definitions for an LPC17xx project, read from a pin list exported from a spreadsheet.

	"ITEM","P176x","PORT","BIT","FUNC1","FUNC2","FUNC3","SIGNAME","FUNC","IN/OUT","MODE","OD","DEF","ACT"
	1,46,0,0,"RD1","TXD3","SDA1","GSM_TX",2,0,,,,
	2,47,0,1,"TD1","RXD3","SCL1","GSM_RX",2,1,,,,

	ITEM    Sequential ID for each row, checked to be a number but otherwise ignored.
	P176x   Physical pin number on the package, `N/A' or 0 if the port bit is not bonded out.
	PORT    GPIO port number, 0..4.
	BIT     Bit number within the port, 0..31.
	FUNC1-3 Names of alternate functions 1 to 3, for reference only.
	SIGNAME Name of the signal in this project, empty if the pin is unused.
	FUNC    Pin function select 0..3, 0 is GPIO.
	IN/OUT  Direction, input (1) or output (0).
	MODE    Pin mode 0..3 (pullup, repeater, none, pulldown).
	OD      Open drain (1 = on).
	DEF     Default (initialised) output level.
	ACT     Signal is active high (1) or active low (0).
"""

from dataclasses import dataclass
from typing import Optional

import csv_parser

# Stop reading pins when this many have been accepted.
MAX_PINS = 256

# How an unset FUNC or IN/OUT is written in the generated struct.
UNSET = 0xff

DIR_INPUT, DIR_OUTPUT = 1, 0
ACTIVE_LOW, ACTIVE_HIGH = 0, 1

class PinTableError(ValueError):
	"Raised by a strict PinTable for too many pins, or by check_duplicates()."
	pass

@dataclass(frozen=True)
class PinDefinition:
	seq: int				# Index in the pin table, dense from zero.
	pinnum: int
	port: int
	bit: int
	altfunc1: str
	altfunc2: str
	altfunc3: str
	signame: str
	func: Optional[int]		# None if unset.
	inout: Optional[int]	# None if unset.
	mode: int = 0
	odrain: int = 0
	default: int = 0
	active: int = ACTIVE_HIGH

	@property
	def is_open_drain(self):
		return self.odrain == 1

class PinTable:
	"""Ordered collection of accepted pins, in sequence order.

	Once `capacity' pins are held further pins are dropped without complaint, unless `strict' is set in which case PinTableError is
	raised. Duplicate signal names are found by duplicate_signals() or check_duplicates(), otherwise they turn up as redefinitions in
	the generated code.
	"""
	def __init__(self, capacity=MAX_PINS, strict=False):
		self.capacity = capacity
		self.strict = strict
		self.pins = []

	def __len__(self):
		return len(self.pins)
	def __iter__(self):
		return iter(self.pins)
	def __getitem__(self, idx):
		return self.pins[idx]

	@property
	def full(self):
		return len(self.pins) >= self.capacity

	def append(self, pin):
		"""Add a pin, returning False if it was dropped as the table is full."""
		if self.full:
			if self.strict:
				raise PinTableError(f"more than {self.capacity} pins, `{pin.signame}' not added")
			return False
		self.pins.append(pin)
		return True

	def duplicate_signals(self):
		"""Return signal names used by more than one pin, in the order they are first repeated."""
		seen, dups = set(), []
		for pin in self.pins:
			if pin.signame in seen and pin.signame not in dups:
				dups.append(pin.signame)
			seen.add(pin.signame)
		return dups

	def check_duplicates(self):
		"""Raise PinTableError naming every signal used by more than one pin."""
		if dups := self.duplicate_signals():
			raise PinTableError(f"duplicate signal names: {', '.join(dups)}")

def _name(field):
	"Names of a single character are ignored."
	return field if len(field) > 1 else None

def _optional_int(field):
	"Optional numbers keep their default if they cannot be read."
	try:
		return csv_parser.scan_int(field)
	except ValueError:
		return None

class PinParse(csv_parser.CSVparse):
	"""Parse a pin list into a PinTable. Rows with no pin number or no signal name are dropped, and take no sequence number.
		If given, on_pin is called with each new PinDefinition as it is added to the table."""
	COLUMN_NAMES = 'Item Pin Port Bit Func1 Func2 Func3 Sig Func InOut Mode OD Def Act'.split()
	DEFAULTS = dict(Item=0, Pin=0, Port=0, Bit=0, Func1='', Func2='', Func3='', Sig='',
	  Func=None, InOut=None, Mode=0, OD=0, Def=0, Act=ACTIVE_HIGH)

	def __init__(self, table=None, on_pin=None):
		super().__init__()
		self.table = table if table is not None else PinTable()
		self.on_pin = on_pin
		self.data = self.table.pins

	# Required numbers.
	validate_col_Item = staticmethod(csv_parser.scan_int)
	validate_col_Port = staticmethod(csv_parser.scan_int)
	validate_col_Bit = staticmethod(csv_parser.scan_int)
	@staticmethod
	def validate_col_Pin(pin): # pylint: disable=invalid-name
		"`N/A' means not on this package."
		if pin.startswith('N/A'):
			raise csv_parser.SkipRow
		return csv_parser.scan_int(pin)

	validate_col_Func1 = validate_col_Func2 = validate_col_Func3 = validate_col_Sig = staticmethod(_name)
	validate_col_Func = validate_col_InOut = validate_col_Mode = staticmethod(_optional_int)
	validate_col_OD = validate_col_Def = validate_col_Act = staticmethod(_optional_int)

	def handle_row(self, row):
		if row['Pin'] == 0: return True		# Port bit does not exist on this package.
		if not row['Sig']: return True		# Pin not used in this design.

		pin = PinDefinition(seq=len(self.table), pinnum=row['Pin'], port=row['Port'], bit=row['Bit'],
		  altfunc1=row['Func1'], altfunc2=row['Func2'], altfunc3=row['Func3'], signame=row['Sig'],
		  func=row['Func'], inout=row['InOut'], mode=row['Mode'], odrain=row['OD'], default=row['Def'], active=row['Act'])
		if not self.table.append(pin):
			return False
		if self.on_pin is not None:
			self.on_pin(pin)
		return self.table.strict or not self.table.full
