"""Compute initial values for the LPC17xx GPIO and pin connect registers from a table of pins.

Each calc_xxx() function makes one pass over the pins and returns a fresh list of register values, so the results depend only on the
pins and their order. If two pins share a port & bit the later one wins.
"""

import pindefs

N_PORTS = 5
N_BITS = 32
REG_MASK = 0xffffffff

# Each port has two 32 bit PINSEL/PINMODE registers with a 2 bit field for each port bit.
N_PINSEL = 11
N_PINMODE = 10

class RegisterRangeError(ValueError):
	"A pin's port or bit does not address a register."
	pass

def check_pin(pin):
	if pin.port not in range(N_PORTS) or pin.bit not in range(N_BITS):
		raise RegisterRangeError(f"pin `{pin.signame}': port {pin.port} bit {pin.bit} out of range")

def reg_pair(port, bit):
	"""Return (register index, shift) for the 2 bit field of a port bit in a PINSEL or PINMODE register pair.
		reg_pair(1, 17) => (3, 2)"""
	if bit < 16:
		return 2 * port, 2 * bit
	return 2 * port + 1, 2 * (bit - 16)

def _set_bit(regs, port, bit, value):
	"Set the bit if value is 1, clear it if 0, else leave alone."
	if value == 1:
		regs[port] |= 1 << bit
	elif value == 0:
		regs[port] &= ~(1 << bit) & REG_MASK

def _set_field(regs, port, bit, value):
	reg, shift = reg_pair(port, bit)
	regs[reg] &= ~(0x03 << shift) & REG_MASK	# Zero the pair of bits.
	regs[reg] |= (value & 0x03) << shift

def calc_fiodir(pins):
	"FIODIR bit is 0 for input, 1 for output. Unset directions are left as 0."
	fiodir = [0] * N_PORTS
	for pin in pins:
		if pin.inout == pindefs.DIR_INPUT:
			_set_bit(fiodir, pin.port, pin.bit, 0)
		elif pin.inout == pindefs.DIR_OUTPUT:
			_set_bit(fiodir, pin.port, pin.bit, 1)
	return fiodir

def calc_pinsel(pins):
	pinsel = [0] * N_PINSEL
	for pin in pins:
		if pin.func is not None:
			_set_field(pinsel, pin.port, pin.bit, pin.func)
	return pinsel

def calc_pinmode(pins):
	"""Returns PINMODE values and the PINMODE_OD open drain values."""
	pinmode = [0] * N_PINMODE
	pinmode_od = [0] * N_PORTS
	for pin in pins:
		_set_field(pinmode, pin.port, pin.bit, pin.mode)
		_set_bit(pinmode_od, pin.port, pin.bit, pin.odrain)
	return pinmode, pinmode_od

def calc_fiopin(pins):
	"Initial output levels."
	fiopin = [0] * N_PORTS
	for pin in pins:
		_set_bit(fiopin, pin.port, pin.bit, pin.default)
	return fiopin

def calc_fiomask(pins):
	"All bits masked except for pins using function 0 (GPIO)."
	fiomask = [REG_MASK] * N_PORTS
	for pin in pins:
		if pin.func == 0:
			_set_bit(fiomask, pin.port, pin.bit, 0)
	return fiomask

class RegisterGroups:
	"""Initial values of all registers, computed from a sequence of pins."""
	# Name used in the generated macros, attribute. This is the order in which they are written.
	GROUPS = (
		('FIODIR', 'fiodir'),
		('PINSEL', 'pinsel'),
		('PINMODE', 'pinmode'),
		('PINMODE_OD', 'pinmode_od'),
		('FIOPIN', 'fiopin'),
		('FIOMASK', 'fiomask'),
	)

	def __init__(self, pins=()):
		pins = list(pins)
		for pin in pins:
			check_pin(pin)
		self.fiodir = calc_fiodir(pins)
		self.pinsel = calc_pinsel(pins)
		self.pinmode, self.pinmode_od = calc_pinmode(pins)
		self.fiopin = calc_fiopin(pins)
		self.fiomask = calc_fiomask(pins)

	def __eq__(self, other):
		if not isinstance(other, RegisterGroups):
			return NotImplemented
		return all(getattr(self, attr) == getattr(other, attr) for _, attr in self.GROUPS)

	def items(self):
		"""Yield (name, values) for each group in output order."""
		for name, attr in self.GROUPS:
			yield name, getattr(self, attr)

def accumulate(table):
	"Compute all register groups for a pin table."
	return RegisterGroups(table)
