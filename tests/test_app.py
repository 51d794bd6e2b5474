from conftest import page_count

import app
from data_loaders import MemberStore
from models import Member, Preferences


def _members_csv(tmp_path):
    p = tmp_path / "members.csv"
    p.write_text("Name,Surname,Login,Status\nDoe,John,jdoe,4\nSmith,Anna,asmith,5\n", encoding="utf-8")
    return str(p)


def test_main_blank_template(tmp_path):
    out = tmp_path / "out"
    assert app.main(["--blank", "-o", str(out), "--association-name", "Assoc"]) == 0
    pdf = (out / "fullcard.pdf").read_bytes()
    assert page_count(pdf) == 1


def test_main_generates_one_card_per_member(tmp_path, capsys):
    out = tmp_path / "out"
    assert app.main([_members_csv(tmp_path), "-o", str(out)]) == 0
    names = sorted(p.name for p in out.iterdir())
    assert names == ["fullcard_Anna_Smith.pdf", "fullcard_John_Doe.pdf"]
    assert "Completed! Generated 2 card(s)" in capsys.readouterr().out


def test_main_single_login(tmp_path):
    out = tmp_path / "out"
    assert app.main([_members_csv(tmp_path), "-o", str(out), "--login", "asmith"]) == 0
    assert [p.name for p in out.iterdir()] == ["fullcard_Anna_Smith.pdf"]


def test_main_unknown_login_fails(tmp_path, capsys):
    assert app.main([_members_csv(tmp_path), "-o", str(tmp_path / "out"), "--login", "nobody"]) == 1
    assert "no member with login 'nobody'" in capsys.readouterr().out


def test_main_unreadable_members_file(tmp_path, capsys):
    bad = tmp_path / "bad.csv"
    bad.write_text("Login\njdoe\n", encoding="utf-8")
    assert app.main([str(bad), "-o", str(tmp_path / "out")]) == 1
    assert "Error reading members" in capsys.readouterr().out


def test_generate_all_skips_failing_member(tmp_path, monkeypatch, capsys):
    store = MemberStore([Member(name="Good", login="good"), Member(name="Bad", login="bad")])
    generator = app.FullcardGenerator(Preferences(pref_nom="Assoc"), store, str(tmp_path))
    render = generator.render

    def flaky(member):
        if member is not None and member.login == "bad":
            raise ValueError("boom")
        return render(member)

    monkeypatch.setattr(generator, "render", flaky)
    written = generator.generate_all()
    assert [p.name for p in written] == ["fullcard_Good.pdf"]
    assert "Error generating card for Bad: boom" in capsys.readouterr().out


def test_render_blank_and_member_differ():
    generator = app.FullcardGenerator(Preferences(pref_nom="Assoc"))
    assert generator.render(None) != generator.render(Member(name="Doe", status=4))
    assert generator.filename_for(None) == "fullcard.pdf"
