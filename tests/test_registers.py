import unittest

import pindefs
import registers
from pin_helpers import make_pin

class TestRegPair(unittest.TestCase):
	def test_low_half(self):
		self.assertEqual(registers.reg_pair(0, 0), (0, 0))
		self.assertEqual(registers.reg_pair(2, 15), (4, 30))
	def test_high_half(self):
		self.assertEqual(registers.reg_pair(1, 17), (3, 2))
		self.assertEqual(registers.reg_pair(4, 31), (9, 30))

class TestEmpty(unittest.TestCase):
	def test_empty(self):
		groups = registers.accumulate(pindefs.PinTable())
		self.assertEqual(groups.fiodir, [0] * 5)
		self.assertEqual(groups.pinsel, [0] * 11)
		self.assertEqual(groups.pinmode, [0] * 10)
		self.assertEqual(groups.pinmode_od, [0] * 5)
		self.assertEqual(groups.fiopin, [0] * 5)
		self.assertEqual(groups.fiomask, [0xffffffff] * 5)
	def test_order(self):
		names = [name for name, _ in registers.accumulate([]).items()]
		self.assertEqual(names, ['FIODIR', 'PINSEL', 'PINMODE', 'PINMODE_OD', 'FIOPIN', 'FIOMASK'])

class TestFiodir(unittest.TestCase):
	def test_output(self):
		self.assertEqual(registers.calc_fiodir([make_pin(inout=pindefs.DIR_OUTPUT)])[0], 0x1)
	def test_input(self):
		self.assertEqual(registers.calc_fiodir([make_pin(inout=pindefs.DIR_INPUT)])[0], 0x0)
	def test_unset_untouched(self):
		pins = [make_pin('A', port=3, bit=31, inout=pindefs.DIR_OUTPUT), make_pin('B', port=3, bit=31, inout=None),
		  make_pin('C', port=3, bit=2, inout=7)]
		self.assertEqual(registers.calc_fiodir(pins), [0, 0, 0, 0x80000000, 0])
	def test_last_wins(self):
		pins = [make_pin('A', port=1, bit=4, inout=pindefs.DIR_OUTPUT), make_pin('B', port=1, bit=4, inout=pindefs.DIR_INPUT)]
		self.assertEqual(registers.calc_fiodir(pins)[1], 0)
		self.assertEqual(registers.calc_fiodir(pins[::-1])[1], 0x10)

class TestPinsel(unittest.TestCase):
	def test_high_half(self):
		pinsel = registers.calc_pinsel([make_pin(port=1, bit=17, func=2)])
		self.assertEqual(pinsel[3], 0b1000)
		self.assertEqual(sum(pinsel), 0b1000)
	def test_other_bits_untouched(self):
		pins = [make_pin('A', port=1, bit=16, func=3), make_pin('B', port=1, bit=18, func=3), make_pin('C', port=1, bit=17, func=2)]
		self.assertEqual(registers.calc_pinsel(pins)[3], 0b111011)
	def test_overwrite_field(self):
		pins = [make_pin('A', port=0, bit=5, func=3), make_pin('B', port=0, bit=5, func=1)]
		self.assertEqual(registers.calc_pinsel(pins)[0], 1 << 10)
	def test_unset(self):
		pins = [make_pin('A', port=0, bit=5, func=3), make_pin('B', port=0, bit=5, func=None)]
		self.assertEqual(registers.calc_pinsel(pins)[0], 3 << 10)
	def test_top_field(self):
		self.assertEqual(registers.calc_pinsel([make_pin(port=4, bit=31, func=1)])[9], 0x40000000)

class TestPinmode(unittest.TestCase):
	def test_mode(self):
		pinmode, od = registers.calc_pinmode([make_pin(port=2, bit=20, mode=2), make_pin('B', port=0, bit=1, mode=3)])
		self.assertEqual(pinmode[5], 2 << 8)
		self.assertEqual(pinmode[0], 3 << 2)
		self.assertEqual(od, [0] * 5)
	def test_open_drain(self):
		pins = [make_pin('A', port=2, bit=20, odrain=1), make_pin('B', port=2, bit=3, odrain=1), make_pin('C', port=2, bit=3, odrain=0),
		  make_pin('D', port=2, bit=20, odrain=5)]
		_, od = registers.calc_pinmode(pins)
		self.assertEqual(od[2], 1 << 20)

class TestFiopin(unittest.TestCase):
	def test_default_level(self):
		pins = [make_pin('A', port=4, bit=28, default=1), make_pin('B', port=4, bit=29, default=0), make_pin('C', port=4, bit=0, default=1)]
		self.assertEqual(registers.calc_fiopin(pins)[4], 0x10000001)

class TestFiomask(unittest.TestCase):
	def test_gpio_unmasked(self):
		fiomask = registers.calc_fiomask([make_pin(port=2, bit=5, func=0)])
		self.assertEqual(fiomask, [0xffffffff, 0xffffffff, 0xffffffdf, 0xffffffff, 0xffffffff])
	def test_other_functions_masked(self):
		pins = [make_pin('A', port=0, bit=1, func=1), make_pin('B', port=0, bit=2, func=None), make_pin('C', port=0, bit=31, func=0)]
		self.assertEqual(registers.calc_fiomask(pins)[0], 0x7fffffff)

class TestRegisterGroups(unittest.TestCase):
	PINS = [
		make_pin('A', port=0, bit=0, func=2, inout=0),
		make_pin('B', port=1, bit=17, func=0, inout=1, mode=2, odrain=1, default=1),
		make_pin('C', port=4, bit=29, func=1, inout=0, default=1),
	]
	def test_repeatable(self):
		table = pindefs.PinTable()
		for pin in self.PINS:
			table.append(pin)
		self.assertEqual(registers.accumulate(table), registers.accumulate(table))
		self.assertEqual(registers.accumulate(table).pinsel, registers.accumulate(self.PINS).pinsel)
	def test_values(self):
		groups = registers.RegisterGroups(self.PINS)
		self.assertEqual(groups.fiodir, [1, 0, 0, 0, 1 << 29])
		self.assertEqual(groups.pinsel[0], 2)
		self.assertEqual(groups.pinsel[9], 1 << 26)
		self.assertEqual(groups.pinmode[3], 2 << 2)
		self.assertEqual(groups.pinmode_od[1], 1 << 17)
		self.assertEqual(groups.fiopin, [0, 1 << 17, 0, 0, 1 << 29])
		self.assertEqual(groups.fiomask[1], 0xfffdffff)
	def test_range(self):
		for pin in (make_pin(port=5), make_pin(port=-1), make_pin(bit=32), make_pin(bit=-1)):
			with self.assertRaises(registers.RegisterRangeError):
				registers.accumulate([pin])

if __name__ == '__main__':
	unittest.main()
