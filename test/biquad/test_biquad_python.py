# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
import warnings
from copy import deepcopy

import numpy as np
import pytest
import scipy.signal as spsig

import biquad_dsp.dsp.biquad as bq
import biquad_dsp.dsp.design as design
import biquad_dsp.dsp.signal_gen as gen
import biquad_dsp.dsp.utils as utils
from biquad_dsp.models import fields
from biquad_dsp.models.biquad import BiquadParameters
from biquad_dsp.models.coefficients import FilterCoefficients

STRUCTURES = [bq.biquad_df1, bq.biquad_df2t]


def run_filter(filter, signal):
    output = np.zeros(len(signal), dtype=np.float32)
    for n in range(len(signal)):
        output[n] = filter.process_sample(signal[n])
    return output


@pytest.mark.parametrize("structure", STRUCTURES)
@pytest.mark.parametrize("fs", [16000, 44100, 48000, 96000])
@pytest.mark.parametrize("amplitude", [0.5, 1, 16])
def test_bypass(structure, fs, amplitude):
    filter = structure()
    assert filter.coeffs == FilterCoefficients.bypass()

    signal = gen.log_chirp(fs, 0.05, amplitude)
    output = run_filter(filter, signal)

    np.testing.assert_array_equal(signal, output)


@pytest.mark.parametrize(
    "filter_type",
    [
        fields.LowPass(freq=1000, q=0.707),
        fields.HighPass(freq=100, q=2),
        fields.BandPass(freq=2000, q=5),
        fields.Notch(freq=60, q=1),
        fields.PeakingEq(freq=1000, q=5, gain_db=10),
        fields.PeakingEq(freq=500, q=1, gain_db=-10),
        fields.LowShelf(freq=200, gain_db=3),
        fields.HighShelf(freq=5000, gain_db=-2),
        fields.AllPass(freq=3000, q=0.7),
        fields.FirstOrderLowShelf(freq=300, gain_db=6),
        fields.FirstOrderAllPass(freq=800),
        fields.OnePoleLowPass(freq=50),
    ],
)
def test_structures_match(filter_type):
    fs = 48000
    coeffs = design.derive(filter_type, 1 / fs)
    signal = gen.log_chirp(fs, 0.05, 0.5)

    output_df1 = run_filter(bq.biquad_df1(coeffs), signal)
    output_df2t = run_filter(bq.biquad_df2t(coeffs), signal)

    np.testing.assert_allclose(output_df1, output_df2t, rtol=1e-4, atol=1e-4)

    # compare to a double precision reference
    b, a = coeffs.to_ba()
    output_ref = spsig.lfilter(b, a, signal.astype(np.float64))
    np.testing.assert_allclose(output_df1, output_ref, rtol=1e-4, atol=1e-4)
    np.testing.assert_allclose(output_df2t, output_ref, rtol=1e-4, atol=1e-4)


def test_impulse_response():
    fs = 48000
    coeffs = design.derive(fields.LowPass(freq=1000, q=0.707), 1 / fs)
    filter = bq.biquad_df1(coeffs)

    n_samples = 256
    output = run_filter(filter, gen.impulse(n_samples))

    # closed form impulse response from the partial fraction expansion
    b, a = coeffs.to_ba()
    r, p, k = spsig.residuez(b, a)
    n = np.arange(n_samples)
    expected = np.real(np.sum(r[:, None] * p[:, None] ** n, axis=0))
    expected[: len(k)] += np.real(k)

    np.testing.assert_allclose(output, expected, atol=1e-5)

    # decaying and oscillatory
    assert np.any(output < 0)
    assert np.max(np.abs(output[-32:])) < 1e-6


@pytest.mark.parametrize("structure", STRUCTURES)
@pytest.mark.parametrize("level", [0.5, -0.25, 1.0])
@pytest.mark.parametrize("f", [1000, 5000])
def test_lowpass_dc_gain(structure, level, f):
    fs = 48000
    coeffs = design.derive(fields.LowPass(freq=f, q=0.707), 1 / fs)
    filter = structure(coeffs)

    output = run_filter(filter, gen.step(fs // 10, level))
    assert output[-1] == pytest.approx(level, rel=1e-3)


@pytest.mark.parametrize("structure", STRUCTURES)
@pytest.mark.parametrize("f", [10, 100, 1000, 10000])
def test_one_pole_step(structure, f):
    fs = 48000
    coeffs = design.derive(fields.OnePoleLowPass(freq=f), 1 / fs)
    filter = structure(coeffs)

    output = run_filter(filter, gen.step(fs))

    assert np.all(np.diff(output) >= 0)
    assert np.all(output <= 1.0 + 1e-6)
    assert output[-1] == pytest.approx(1.0, abs=1e-4)


@pytest.mark.parametrize("structure", STRUCTURES)
def test_reset_installs_bypass(structure):
    fs = 48000
    coeffs = design.derive(fields.LowPass(freq=500, q=2), 1 / fs)
    signal = gen.log_chirp(fs, 0.01, 0.5)

    filter = structure(coeffs)
    run_filter(filter, signal)
    filter.reset()
    assert filter.coeffs == FilterCoefficients.bypass()

    # direct form 1 multiplies the saved history by zero, transposed
    # direct form 2 flushes its two state registers into the output
    output = run_filter(filter, signal)
    skip = 0 if structure is bq.biquad_df1 else 2
    np.testing.assert_array_equal(output[skip:], signal[skip:])


@pytest.mark.parametrize("structure", STRUCTURES)
def test_reset_keeps_history(structure):
    fs = 48000
    coeffs = design.derive(fields.LowPass(freq=500, q=2), 1 / fs)
    signal = gen.log_chirp(fs, 0.01, 0.5)

    ref = structure(coeffs)
    filter = structure(coeffs)
    run_filter(ref, signal)
    run_filter(filter, signal)

    # reset then restore the coefficients, the history is unchanged so
    # the output continues as if nothing happened
    filter.reset()
    filter.set_coefficients(coeffs)

    np.testing.assert_array_equal(run_filter(filter, signal), run_filter(ref, signal))


@pytest.mark.parametrize("structure", STRUCTURES)
def test_reset_state(structure):
    fs = 48000
    coeffs = design.derive(fields.PeakingEq(freq=1000, q=3, gain_db=6), 1 / fs)
    signal = gen.log_chirp(fs, 0.01, 0.5)

    filter = structure(coeffs)
    expected = run_filter(filter, signal)

    filter.reset_state()
    assert filter.coeffs == coeffs
    np.testing.assert_array_equal(run_filter(filter, signal), expected)


@pytest.mark.parametrize("structure", STRUCTURES)
def test_set_coefficients_mid_stream(structure):
    fs = 48000
    signal = gen.sin(fs, 0.02, 440, 0.5)
    filter = structure(design.derive(fields.LowPass(freq=200, q=0.707), 1 / fs))

    first = run_filter(filter, signal)
    filter.set_coefficients(design.derive(fields.HighPass(freq=2000, q=0.707), 1 / fs))
    second = run_filter(filter, signal)

    assert np.all(np.isfinite(first))
    assert np.all(np.isfinite(second))
    assert filter.coeffs.a0 == design.make_highpass(2000, 0.707, 1 / fs).a0


@pytest.mark.parametrize("structure", STRUCTURES)
def test_process_block(structure):
    fs = 48000
    coeffs = design.derive(fields.HighShelf(freq=3000, gain_db=6), 1 / fs)
    signal = gen.log_chirp(fs, 0.02, 0.5)
    expected = run_filter(structure(coeffs), signal)

    # numpy arrays are processed in place
    block = signal.copy()
    filter = structure(coeffs)
    assert filter.process_block(block) is block
    np.testing.assert_array_equal(block, expected)

    # as are lists, split into several blocks
    block = signal.tolist()
    filter = structure(coeffs)
    for start in range(0, len(block), 64):
        chunk = block[start : start + 64]
        filter.process_block(chunk)
        block[start : start + 64] = chunk
    np.testing.assert_array_equal(np.array(block, dtype=np.float32), expected)


@pytest.mark.parametrize("structure", STRUCTURES)
def test_independent_instances(structure):
    fs = 48000
    coeffs = design.derive(fields.BandPass(freq=1000, q=2), 1 / fs)
    signal = gen.log_chirp(fs, 0.01, 0.5)

    filter_1 = structure(coeffs)
    run_filter(filter_1, signal)
    filter_2 = deepcopy(filter_1)
    filter_3 = structure(coeffs)

    out_1 = run_filter(filter_1, signal)
    out_2 = run_filter(filter_2, signal)
    out_3 = run_filter(filter_3, signal)

    np.testing.assert_array_equal(out_1, out_2)
    assert not np.array_equal(out_1, out_3)

    # processing one channel does not affect another
    np.testing.assert_array_equal(out_3, run_filter(structure(coeffs), signal))


@pytest.mark.parametrize("structure", STRUCTURES)
def test_non_finite_propagates(structure):
    coeffs = design.derive(fields.LowPass(freq=1000, q=0.707), 1 / 48000)
    filter = structure(coeffs)

    with np.errstate(all="ignore"):
        assert np.isnan(filter.process_sample(np.nan))
        assert np.isnan(filter.process_sample(0.0))

    degenerate = structure(design.derive(fields.LowPass(freq=1000, q=0), 1 / 48000))
    with np.errstate(all="ignore"):
        output = run_filter(degenerate, gen.impulse(8))
    assert not np.all(np.isfinite(output))


def test_freq_response():
    fs = 48000
    coeffs = design.derive(fields.Notch(freq=1000, q=1), 1 / fs)
    f, h = bq.biquad_df2t(coeffs).freq_response(fs, 512)
    f_ref, h_ref = coeffs.freq_response(fs, 512)

    np.testing.assert_array_equal(f, f_ref)
    np.testing.assert_array_equal(h, h_ref)
    assert len(f) == 512


@pytest.mark.parametrize("structure", ["df1", "df2t"])
def test_biquad_from_parameters(structure):
    params = BiquadParameters(
        filter_type=fields.PeakingEq(freq=1000, q=2, gain_db=-6), structure=structure, fs=44100
    )

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        filter = bq.biquad_from_parameters(params)

    assert isinstance(filter, {"df1": bq.biquad_df1, "df2t": bq.biquad_df2t}[structure])
    assert filter.coeffs == design.derive(params.filter_type, 1 / 44100)


def test_biquad_from_parameters_defaults():
    filter = bq.biquad_from_parameters(BiquadParameters())
    assert isinstance(filter, bq.biquad_df2t)
    assert filter.coeffs == FilterCoefficients.bypass()


def test_biquad_from_parameters_warnings():
    params = BiquadParameters(filter_type=fields.LowPass(freq=30000, q=0.707), fs=48000)
    with pytest.warns(utils.NyquistWarning):
        filter = bq.biquad_from_parameters(params)

    # the filter is still created, with the requested frequency
    assert filter.coeffs == design.derive(params.filter_type, 1 / 48000)

    params = BiquadParameters(filter_type=fields.LowPass(freq=1000, q=-1), fs=48000)
    with pytest.warns(utils.UnstableFilterWarning):
        bq.biquad_from_parameters(params)


def test_one_pole_above_nyquist_no_warning():
    # the one pole design is not pre-warped, so has no fs/2 limit
    params = BiquadParameters(filter_type=fields.OnePoleLowPass(freq=30000), fs=48000)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        filter = bq.biquad_from_parameters(params)

    assert filter.coeffs == design.derive(params.filter_type, 1 / 48000)


@pytest.mark.parametrize("structure", STRUCTURES)
@pytest.mark.parametrize("dtype", [np.int16, np.int32, np.uint8, np.bool_])
def test_process_block_rejects_integer_arrays(structure, dtype):
    filter = structure(design.derive(fields.LowPass(freq=1000, q=0.707), 1 / 48000))
    block = np.ones(16, dtype=dtype)
    with pytest.raises(TypeError):
        filter.process_block(block)

    # the block is left untouched
    np.testing.assert_array_equal(block, np.ones(16, dtype=dtype))


@pytest.mark.parametrize("structure", STRUCTURES)
@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_process_block_float_arrays(structure, dtype):
    coeffs = design.derive(fields.LowPass(freq=1000, q=0.707), 1 / 48000)
    signal = gen.log_chirp(48000, 0.01, 0.5)
    expected = run_filter(structure(coeffs), signal)

    block = signal.astype(dtype)
    structure(coeffs).process_block(block)
    np.testing.assert_array_equal(block.astype(np.float32), expected)
