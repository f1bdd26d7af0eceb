"""Render a pin table and its register values as a C header (declarations) and a C source file (definitions).

The functions here return lists of lines, the Emitter class routes them to a pair of codegen.Codegen objects in the right order.
"""

import codegen
import pindefs

TOOL_NAME = 'PINS_MK'

# Width of the signal name column in the bit access macros, and of the name column in the port & bit defines.
SIG_COL = 25
DEFINE_COL = 32

# Pin array initialiser wraps after this column.
PINARRAY_WIDTH = 80
PINARRAY_INDENT = 4

PINDEF_FIELDS = (
	('int', 'seq'), ('int', 'pinnum'), ('int', 'port'), ('int', 'bit'),
	('char *', 'altfunc1'), ('char *', 'altfunc2'), ('char *', 'altfunc3'), ('char *', 'signame'),
	('int', 'func'), ('int', 'inout'), ('int', 'mode'), ('int', 'odrain'), ('int', 'def'), ('int', 'active'),
)

def optional(value):
	"Unset values are written as the sentinel UNSET."
	return pindefs.UNSET if value is None else value

def banner_fields(timestamp, infile, prefix, fname_c, fname_h):
	return [
		('Processing Date/Time', timestamp),
		('Input Pin Info CSV file', infile),
		('Project Name Prefix', prefix),
		('Output C-File', fname_c),
		('Output H-File', fname_h),
	]

def struct_typedef(prefix):
	"""Declare the pin descriptor struct type."""
	lines = [f"typedef struct tag{prefix}_PINDEF {{"]
	lines += [f"  {ctype}{'' if ctype.endswith('*') else ' '}{name};" for ctype, name in PINDEF_FIELDS]
	lines += [f"}} {prefix}_PINDEF;", '']
	return lines

def pindef_symbol(prefix, pin):
	return f"{prefix}_{pin.signame}"

def pindef_decl(prefix, pin):
	return f"extern const {prefix}_PINDEF {pindef_symbol(prefix, pin)};"

def pindef_defn(prefix, pin):
	"""Define a pin descriptor with all fields as a literal initialiser."""
	values = [pin.seq, pin.pinnum, pin.port, pin.bit]
	values += [f'"{x}"' for x in (pin.altfunc1, pin.altfunc2, pin.altfunc3, pin.signame)]
	values += [optional(pin.func), optional(pin.inout), pin.mode, pin.odrain, pin.default, pin.active]
	return f"const {prefix}_PINDEF {pindef_symbol(prefix, pin)} = {{ {', '.join(str(x) for x in values)} }};"

def pinarray_decl(prefix, count):
	return [
		f"#define NUM_PINDEFS ({count})",
		f"extern const {prefix}_PINDEF* {prefix}_PINS[NUM_PINDEFS];",
		'',
	]

def pinarray_defn(prefix, pins):
	"""Define the array of pointers to all pin descriptors. Entries are packed onto a line until the running width passes
		PINARRAY_WIDTH, the width of each entry is counted without the leading `&'."""
	indent = ' ' * PINARRAY_INDENT
	text = f"const {prefix}_PINDEF* {prefix}_PINS[NUM_PINDEFS] = {{\n{indent}"
	ncol = PINARRAY_INDENT
	for pin in pins:
		entry = f"{pindef_symbol(prefix, pin)}, "
		text += '&' + entry
		ncol += len(entry)
		if ncol > PINARRAY_WIDTH:
			text += '\n' + indent
			ncol = PINARRAY_INDENT
	text += '\n};'
	return text.split('\n')

def register_defines(prefix, groups):
	"""Define the initial value of every register, a block for each group."""
	lines = []
	for name, values in groups.items():
		lines += [f"#define {prefix}_{name}{idx}_INIT (0x{value:08x})" for idx, value in enumerate(values)]
		lines.append('')
	return lines

def bit_defines(prefix, pins):
	"""Define the port and bit of each pin."""
	lines = []
	for pin in pins:
		lines.append(f"#define {pindef_symbol(prefix, pin) + '_PORT':<{DEFINE_COL}}    ({pin.port})")
		lines.append(f"#define {pindef_symbol(prefix, pin) + '_BIT':<{DEFINE_COL}}    ({pin.bit})")
	lines.append('')
	return lines

def _write(pin, reg):
	return f"(LPC_GPIO{pin.port}->{reg} = (1<<{pin.bit}))"
def _read(pin):
	return f"((LPC_GPIO{pin.port}->FIOPIN & (1<<{pin.bit})) >> {pin.bit})"

def bit_macro(prefix, action, pin, body, gap):
	"""A single access macro like `#define ZEBRA_SET_LED    (LPC_GPIO1->FIOSET = (1<<4))'. Arg gap is the count of spaces
		between the padded signal name and the body, which keeps the bodies of a family lined up."""
	return f"#define {prefix}_{action}_{pin.signame:<{SIG_COL}}{' ' * gap}{body}"

def bit_macros(prefix, pin):
	"""Macros to access a pin. Open drain pins can only be released with OPEN or pulled low with SINK, other pins get SET & CLR,
		and ON, OFF & QON that follow the pin's active polarity."""
	lines = [bit_macro(prefix, 'GET', pin, _read(pin), 3)]
	if pin.is_open_drain:
		lines.append(bit_macro(prefix, 'OPEN', pin, _write(pin, 'FIOSET'), 4))
		lines.append(bit_macro(prefix, 'SINK', pin, _write(pin, 'FIOCLR'), 4))
		return lines

	lines.append(bit_macro(prefix, 'SET', pin, _write(pin, 'FIOSET'), 4))
	lines.append(bit_macro(prefix, 'CLR', pin, _write(pin, 'FIOCLR'), 4))
	if pin.active == pindefs.ACTIVE_HIGH:
		lines.append(bit_macro(prefix, 'ON', pin, _write(pin, 'FIOSET'), 4))
		lines.append(bit_macro(prefix, 'OFF', pin, _write(pin, 'FIOCLR'), 4))
		lines.append(bit_macro(prefix, 'QON', pin, _read(pin), 3))
	elif pin.active == pindefs.ACTIVE_LOW:
		lines.append(bit_macro(prefix, 'ON', pin, _write(pin, 'FIOCLR'), 5))
		lines.append(bit_macro(prefix, 'OFF', pin, _write(pin, 'FIOSET'), 4))
		lines.append(bit_macro(prefix, 'QON', pin, f"({_read(pin)}^1)", 2))
	return lines

def echo_input(infile, lines):
	"""Copy of the input lines as numbered comments."""
	out = [codegen.BANNER_RULE, f"//***  Input Pin Info CSV file {infile}, printed below for reference:", codegen.BANNER_RULE]
	out += [f"//{lineno:04d}: {line}" for lineno, line in enumerate(lines, start=1)]
	out += [codegen.BANNER_RULE, f"//***  END OF FILE {infile}", codegen.BANNER_RULE]
	return out

class Emitter:
	"""Write generated code to a source (definitions) and a header (declarations) file.

	Call begin() first, then add_pin() as each pin is accepted, then finish() with the complete table and its registers, and
	lastly echo() with the input lines.
	"""
	def __init__(self, cg_c, cg_h, prefix):
		self.cg_c = cg_c
		self.cg_h = cg_h
		self.prefix = prefix.upper()

	def begin(self, timestamp, infile, fname_c, fname_h):
		fields = banner_fields(timestamp, infile, self.prefix, fname_c, fname_h)
		for cg in (self.cg_c, self.cg_h):
			cg.add_autogen_comment(TOOL_NAME, fields)
		self.cg_c.add(f'#include "{fname_h}"', add_nl=+1)
		self.cg_h.add(struct_typedef(self.prefix))

	def add_pin(self, pin):
		self.cg_h.add(pindef_decl(self.prefix, pin))
		self.cg_c.add(pindef_defn(self.prefix, pin))

	def finish(self, table, groups):
		self.cg_h.add(pinarray_decl(self.prefix, len(table)))
		self.cg_c.add(pinarray_defn(self.prefix, table))

		self.cg_h.add(register_defines(self.prefix, groups))
		self.cg_h.add(bit_defines(self.prefix, table))
		for pin in table:
			self.cg_h.add(bit_macros(self.prefix, pin))
		self.cg_h.add_nl()

	def echo(self, infile, lines):
		self.cg_h.add(echo_input(infile, lines))
