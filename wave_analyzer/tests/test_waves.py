import unittest

import numpy as np

from wave_analyzer.models.waves import (
    CosineWave,
    SawtoothWave,
    SinusoidalWave,
    SquareWave,
    TriangularWave,
    WaveType,
    make_wave,
)


class TestWaveEvaluation(unittest.TestCase):
    def test_sinusoidal_peak_and_phase(self):
        w = SinusoidalWave(amplitude=2.0, frequency=1.0, phase=0.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.25), 2.0, places=12)
        self.assertAlmostEqual(w.evaluate(0.0, 0.0), 0.0, places=12)

        shifted = SinusoidalWave(amplitude=2.0, frequency=1.0, phase=90.0)
        self.assertAlmostEqual(shifted.evaluate(0.0, 0.0), 2.0, places=12)

    def test_cosine(self):
        w = CosineWave(amplitude=1.5, frequency=2.0, phase=0.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.0), 1.5, places=12)
        self.assertAlmostEqual(w.evaluate(0.0, 0.25), -1.5, places=12)

    def test_square_sign_of_zero_is_positive(self):
        w = SquareWave(amplitude=3.0, frequency=1.0)
        self.assertEqual(w.evaluate(0.0, 0.0), 3.0)
        self.assertEqual(w.evaluate(0.0, 0.25), 3.0)
        self.assertEqual(w.evaluate(0.0, 0.75), -3.0)

    def test_triangular_shape(self):
        w = TriangularWave(amplitude=2.0, frequency=1.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.0), 0.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.125), 1.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.25), 2.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.5), 0.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.75), -2.0)
        # next period repeats
        self.assertAlmostEqual(w.evaluate(0.0, 1.25), 2.0)

    def test_triangular_phase_in_degrees(self):
        w = TriangularWave(amplitude=1.0, frequency=1.0, phase=90.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.0), 1.0)

    def test_sawtooth_ramp(self):
        w = SawtoothWave(amplitude=1.0, frequency=2.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.0), -1.0)
        self.assertAlmostEqual(w.evaluate(0.0, 0.125), -0.5)
        self.assertAlmostEqual(w.evaluate(0.0, 0.25), 0.0)

    def test_position_is_ignored(self):
        for cls in (SinusoidalWave, CosineWave, SquareWave, TriangularWave, SawtoothWave):
            w = cls(amplitude=1.3, frequency=0.7, phase=33.0)
            self.assertEqual(w.evaluate(0.0, 0.4), w.evaluate(123.0, 0.4))

    def test_scalar_returns_float_and_arrays_broadcast(self):
        w = SquareWave(amplitude=1.0, frequency=1.0)
        self.assertIsInstance(w.evaluate(0.0, 0.1), float)

        t = np.linspace(0.0, 1.0, 11)
        self.assertEqual(w.evaluate(0.0, t).shape, (11,))

        x = np.linspace(0.0, 5.0, 7)
        out = w.evaluate(x, 0.1)
        self.assertEqual(out.shape, (7,))
        self.assertTrue(np.all(out == 1.0))

    def test_evaluate_is_deterministic(self):
        w = TriangularWave(amplitude=0.8, frequency=3.3, phase=-45.0)
        self.assertEqual(w.evaluate(0.0, 1.2345), w.evaluate(0.0, 1.2345))


class TestDerivedQuantities(unittest.TestCase):
    def test_energy_is_half_amplitude_squared(self):
        for a in (-3.0, 0.0, 0.5, 2.0, 7.25):
            self.assertEqual(SinusoidalWave(amplitude=a).energy, 0.5 * a * a)

    def test_period_wavelength_wave_number(self):
        w = CosineWave(amplitude=1.0, frequency=4.0)
        self.assertAlmostEqual(w.period, 0.25)
        self.assertAlmostEqual(w.wavelength(), 0.25)
        self.assertAlmostEqual(w.wavelength(velocity=2.0), 0.5)
        self.assertAlmostEqual(w.angular_frequency, 8.0 * np.pi)
        self.assertAlmostEqual(w.wave_number(velocity=2.0), 4.0 * np.pi)

    def test_zero_frequency_period_is_infinite(self):
        w = SinusoidalWave(frequency=0.0)
        with self.assertWarns(RuntimeWarning):
            period = w.period
        self.assertTrue(np.isinf(period))

    def test_setters(self):
        w = SawtoothWave()
        w.set_parameters(2.0, 3.0, 45.0)
        self.assertEqual((w.amplitude, w.frequency, w.phase), (2.0, 3.0, 45.0))
        w.amplitude = 5.0
        self.assertEqual(w.energy, 12.5)


class TestFactoryAndEquation(unittest.TestCase):
    def test_make_wave_from_tag(self):
        w = make_wave("Square", 2.0, 3.0, 10.0)
        self.assertIsInstance(w, SquareWave)
        self.assertEqual(w.wave_type, WaveType.SQUARE)
        self.assertEqual((w.amplitude, w.frequency, w.phase), (2.0, 3.0, 10.0))

        self.assertIsInstance(make_wave(WaveType.TRIANGULAR), TriangularWave)

    def test_make_wave_unknown_kind(self):
        with self.assertRaises(ValueError):
            make_wave("custom")

    def test_equation_strings(self):
        self.assertEqual(SinusoidalWave(2.0, 1.0, 0.0).equation(), "y = 2 * sin(2π * 1 * t + 0°)")
        self.assertEqual(CosineWave(1.5, 1.5, 90.0).equation(), "y = 1.5 * cos(2π * 1.5 * t + 90°)")
        self.assertEqual(SquareWave(1.0, 0.5).equation(), "y = 1 * sign(sin(2π * 0.5 * t + 0°))")
        self.assertIn("triangular(", TriangularWave().equation())
        self.assertIn("sawtooth(", SawtoothWave().equation())


if __name__ == "__main__":
    unittest.main()
