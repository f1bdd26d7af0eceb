#! /usr/bin/python3

"""Code generator to turn a pin list for an LPC17xx project, exported from a spreadsheet as CSV, into a C source file with a
descriptor for each pin, and a header with register initial values and macros to access each pin.

	pins_mk.py pinout.csv zebra		=> writes zebra_gpio.c & zebra_gpio.h

The input format is described in pindefs.py. Any error leaves the output files incomplete and the exit status non-zero.
"""

import argparse
import os
import sys
import time

import codegen
import csv_parser
import emitter
import pindefs
import registers

TIMESTAMP_FORMAT = '%a %d-%b-%Y %H:%M:%S'

class ArgumentParser(argparse.ArgumentParser):
	"Usage errors exit with the same status as every other error."
	def error(self, message):
		self.print_usage(sys.stderr)
		codegen.error(message)

def make_arg_parser():
	arg_parser = ArgumentParser(
	  description='Code generator to turn a CSV pin list for an LPC17xx into C register initialisers and pin access macros.')
	arg_parser.add_argument('infile', help='input csv file')
	arg_parser.add_argument('prefix', help='short project name, prefixed to output filenames (lower case) and symbols (upper case)')
	arg_parser.add_argument('--output-dir', '-o', default='.', dest='output_dir', help='directory for output files, default current')
	arg_parser.add_argument('--timestamp', help='date/time string for the banner comment, default now')
	arg_parser.add_argument('--strict', action='store_true',
	  help=f'fail on duplicate signal names or more than {pindefs.MAX_PINS} pins, rather than ignoring them')
	return arg_parser

def check_prefix(prefix):
	"""Return the prefix in lower & upper case. Raises ValueError if it contains anything that is not printable ASCII."""
	for ch in prefix:
		if not (ch.isascii() and ch.isprintable()):
			raise ValueError(f"bad character {ch!r}")
	return prefix.lower(), prefix.upper()

def read_lines(infile):
	"Read all lines of the input, without line endings or a byte order mark."
	with open(infile, 'rt', encoding='utf-8-sig', errors='replace', newline='') as fin:
		return csv_parser.split_lines(fin.read())

def main(argv=None):
	options = make_arg_parser().parse_args(argv)

	try:
		prefix, prefix_uc = check_prefix(options.prefix)
	except ValueError:
		codegen.error(f"project prefix `{options.prefix}' must be printable ASCII.")
	fname_c, fname_h = f"{prefix}_gpio.c", f"{prefix}_gpio.h"

	try:
		lines = read_lines(options.infile)
	except OSError:
		codegen.error(f"opening input file `{options.infile}'.")
	codegen.message(f"Opened input CSV file: {options.infile}\n")
	codegen.message(f"prefix: {prefix}\nPREFIX: {prefix_uc}\n")

	# Outputs are truncated before any input is parsed.
	cg_c = codegen.Codegen(options.infile, os.path.join(options.output_dir, fname_c))
	cg_h = codegen.Codegen(options.infile, os.path.join(options.output_dir, fname_h))
	for cg, kind in ((cg_c, 'C'), (cg_h, 'H')):
		try:
			cg.open()
		except OSError:
			codegen.error(f"opening {kind} output file `{cg.outfile}'.")
		codegen.message(f"Opened for output {kind}-File: {cg.outfile}\n")

	emit = emitter.Emitter(cg_c, cg_h, prefix)
	emit.begin(options.timestamp or time.strftime(TIMESTAMP_FORMAT), options.infile, fname_c, fname_h)

	table = pindefs.PinTable(strict=options.strict)
	parser = pindefs.PinParse(table, on_pin=emit.add_pin)
	parser.filename = options.infile
	try:
		parser.read(lines)
		if options.strict:
			table.check_duplicates()
		codegen.message(f"Processed {len(table)} entries in {parser.lineno} lines\n")
		groups = registers.accumulate(table)
	except (csv_parser.CSVparseError, pindefs.PinTableError, registers.RegisterRangeError) as exc:
		codegen.error(str(exc))

	emit.finish(table, groups)
	emit.echo(options.infile, lines[:parser.end_lineno])	# Nothing after the END line.
	cg_c.end()
	cg_h.end()
	return 0

if __name__ == '__main__':
	sys.exit(main())
