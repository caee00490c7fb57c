from wrdhntr.services.games.scheduler import RoundScheduler


def make_scheduler(session, clock, events):
    def on_tick(s, remaining):
        events.append(('tick', remaining))

    def on_end(s, results):
        events.append(('end', results))

    return RoundScheduler(
        session, on_tick, on_end,
        interval=1,
        spawn=lambda fn: fn(),
        sleep=clock.advance,
    )


def started_session(registry, duration=10):
    session = registry.create(mode='exclusive', duration=duration)
    session.join('sid-0', 'Alva')
    session.start('sid-0')
    return session


def test_ticks_every_second_until_round_ends(registry, clock):
    session = started_session(registry)
    events = []
    scheduler = make_scheduler(session, clock, events)
    session.attach_timer(scheduler)
    scheduler.start()

    ticks = [value for kind, value in events if kind == 'tick']
    assert ticks == [9, 8, 7, 6, 5, 4, 3, 2, 1, 0]
    assert events[-1] == ('end', session.results)
    assert session.status == 'ended'
    assert scheduler.cancelled


def test_cancel_is_idempotent(registry, clock):
    session = started_session(registry)
    scheduler = make_scheduler(session, clock, [])
    assert scheduler.cancel() is True
    assert scheduler.cancel() is False


def test_cancelled_scheduler_never_ticks(registry, clock):
    session = started_session(registry)
    events = []
    scheduler = make_scheduler(session, clock, events)
    session.attach_timer(scheduler)
    scheduler.cancel()
    scheduler.start()
    assert events == []
    assert session.status == 'playing'


def test_cancel_during_sleep_drops_the_pending_tick(registry, clock):
    session = started_session(registry)
    events = []

    def sleep_then_evict(seconds):
        clock.advance(seconds)
        registry.evict(session.id)

    scheduler = RoundScheduler(
        session,
        lambda s, r: events.append(('tick', r)),
        lambda s, r: events.append(('end', r)),
        interval=1,
        spawn=lambda fn: fn(),
        sleep=sleep_then_evict,
    )
    session.attach_timer(scheduler)
    scheduler.start()
    assert events == []
    assert scheduler.cancelled


def test_round_ended_elsewhere_stops_the_timer(registry, clock):
    session = started_session(registry)
    events = []

    def sleep_then_end(seconds):
        clock.advance(seconds)
        session.end()

    scheduler = RoundScheduler(
        session,
        lambda s, r: events.append(('tick', r)),
        lambda s, r: events.append(('end', r)),
        interval=1,
        spawn=lambda fn: fn(),
        sleep=sleep_then_end,
    )
    session.attach_timer(scheduler)
    scheduler.start()
    assert events == []


def test_failing_broadcast_does_not_stop_the_round(registry, clock, caplog):
    session = started_session(registry)
    ended = []

    def on_tick(s, remaining):
        raise RuntimeError('emit failed')

    scheduler = RoundScheduler(
        session, on_tick, lambda s, r: ended.append(r),
        interval=1,
        spawn=lambda fn: fn(),
        sleep=clock.advance,
    )
    session.attach_timer(scheduler)
    scheduler.start()

    assert session.status == 'ended'
    assert ended == [session.results]
    assert '[timer-error]' in caplog.text
    assert 'emit failed' in caplog.text

    clock.advance(3600)
    assert registry.sweep() == [session.id]


def test_failing_end_broadcast_is_logged(registry, clock, caplog):
    session = started_session(registry)

    def on_end(s, results):
        raise RuntimeError('room gone')

    scheduler = RoundScheduler(
        session, lambda s, r: None, on_end,
        interval=1,
        spawn=lambda fn: fn(),
        sleep=clock.advance,
    )
    session.attach_timer(scheduler)
    scheduler.start()

    assert session.status == 'ended'
    assert 'callback=on_end' in caplog.text
