import numpy as np
import matplotlib.pyplot as plt

import main_deblur


def test_synthetic_run_writes_outputs(tmp_path, capsys):
    rc = main_deblur.main([
        "--scene", "flat_square", "--size", "64", "--blur_radius", "4",
        "--snr", "500", "--outdir", str(tmp_path), "--no_show",
    ])
    assert rc == 0
    for name in ("filtered.jpg", "preview.png", "deblur_overview.png"):
        assert (tmp_path / name).is_file()
    out = capsys.readouterr().out
    assert "[OK]" in out
    assert "MAE blurred" in out


def test_image_run(tmp_path):
    src = tmp_path / "blurred.png"
    plt.imsave(src, np.full((40, 40), 0.5), cmap="gray", vmin=0, vmax=1)
    outdir = tmp_path / "out"

    rc = main_deblur.main(["--image", str(src), "--radius", "3", "--outdir", str(outdir), "--no_show"])
    assert rc == 0
    assert (outdir / "filtered.jpg").is_file()


def test_invalid_parameters_exit_with_error(tmp_path, capsys):
    rc = main_deblur.main(["--size", "32", "--snr", "0", "--outdir", str(tmp_path), "--no_show"])
    assert rc == 2
    assert "[ERROR]" in capsys.readouterr().out
    assert not (tmp_path / "filtered.jpg").exists()


def test_quick_psf_gallery(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main_deblur.main(["--test", "psf", "--size", "64"]) == 0
    assert (tmp_path / "outputs_test_psf" / "psf_gallery.png").is_file()
    assert "[TEST psf]" in capsys.readouterr().out


def test_run_once_builds_the_filter_once(tmp_path, monkeypatch):
    calls = []
    real_build = main_deblur.build_wiener_filter

    def counting_build(*args, **kwargs):
        calls.append(args)
        return real_build(*args, **kwargs)

    monkeypatch.setattr(main_deblur, "build_wiener_filter", counting_build)
    blurred = np.full((32, 32), 0.5, dtype=np.float32)
    blurred[8:24, 8:24] = 0.8
    params = main_deblur.DeblurParams(radius=3, snr=200)

    restored = main_deblur.run_once(blurred, params, outdir=tmp_path, show=False)
    assert len(calls) == 1
    np.testing.assert_allclose(restored, main_deblur.restore(blurred, 3, 200), atol=1e-6)
