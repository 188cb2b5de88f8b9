import json
import logging

from django.conf import settings
from django.http import JsonResponse, StreamingHttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .fsa_simulation import trace_result, trace_to_path
from .session import AutomatonSession

logger = logging.getLogger(__name__)


def _load_session(request):
    """
    Parses the JSON body and replays its automaton definition.

    Returns:
        Tuple (data, session, construction_errors)

    Raises:
        ValueError: On malformed JSON, a missing or malformed definition
    """
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')

    definition = data.get('automaton')
    if not definition:
        raise ValueError('Missing automaton definition')

    default_kind = getattr(settings, 'AUTOMATA_DEFAULT_KIND', 'nfa')
    session, errors = AutomatonSession.from_definition(definition, default_kind=default_kind)
    return data, session, errors


def _input_symbols(data):
    """The input string, or list of symbols, to simulate."""
    input_symbols = data.get('input', '')
    if input_symbols is None:
        input_symbols = ''

    if isinstance(input_symbols, list):
        if not all(isinstance(symbol, str) for symbol in input_symbols):
            raise ValueError('input list must only contain strings')
    elif not isinstance(input_symbols, str):
        raise ValueError('input must be a string or a list of symbols')

    max_length = getattr(settings, 'AUTOMATA_MAX_INPUT_LENGTH', 1000)
    if len(input_symbols) > max_length:
        raise ValueError(f'input is longer than {max_length} symbols')

    return input_symbols


def _server_error(e):
    logger.exception('Unexpected error while handling automaton request')
    return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def build_automaton(request):
    """
    Django view that replays construction calls and returns the resulting
    automaton for state lists, transition tables and graph drawing.
    """
    try:
        _, session, errors = _load_session(request)
        return JsonResponse({
            'automaton': session.snapshot(),
            'construction_errors': errors
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def simulate(request):
    """
    Django view returning whether the automaton accepts the input.

    Expects a POST request with a JSON body containing:
    - automaton: {'type', 'states', 'transitions'}
    - input: The input string (or list of symbols) to simulate
    """
    try:
        data, session, errors = _load_session(request)
        input_symbols = _input_symbols(data)

        return JsonResponse({
            'type': session.kind.value,
            'accepted': session.simulate(input_symbols),
            'construction_errors': errors
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def simulate_steps(request):
    """
    Django view returning the whole step trace of a run in one response.
    """
    try:
        data, session, errors = _load_session(request)
        input_symbols = _input_symbols(data)

        steps = list(session.simulate_steps(input_symbols))

        return JsonResponse({
            'type': session.kind.value,
            'accepted': trace_result(steps),
            'steps': steps,
            'path': trace_to_path(steps),
            'construction_errors': errors
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


def _event_stream_error(message, status):
    def error_generator():
        yield f"data: {json.dumps({'error': message})}\n\n"

    return StreamingHttpResponse(error_generator(), content_type='text/event-stream', status=status)


@csrf_exempt
@require_POST
def simulate_stream(request):
    """
    Django view streaming the step trace as Server-Sent Events, one event
    per simulation step, so the animator can draw frames as they arrive.
    """
    try:
        data, session, errors = _load_session(request)
        input_symbols = _input_symbols(data)
    except ValueError as e:
        return _event_stream_error(str(e), 400)
    except Exception as e:
        logger.exception('Unexpected error while preparing automaton stream')
        return _event_stream_error(f'Server error: {str(e)}', 500)

    def event_generator():
        try:
            if errors:
                yield f"data: {json.dumps({'type': 'construction_errors', 'errors': errors})}\n\n"

            for event in session.simulate_steps(input_symbols):
                yield f"data: {json.dumps(event)}\n\n"

            # End-of-stream marker
            yield f"data: {json.dumps({'type': 'end'})}\n\n"

        except Exception as e:
            logger.exception('Automaton stream failed')
            yield f"data: {json.dumps({'type': 'error', 'message': str(e)})}\n\n"

    response = StreamingHttpResponse(event_generator(), content_type='text/event-stream')
    response['Cache-Control'] = 'no-cache'
    response['X-Accel-Buffering'] = 'no'  # Disable nginx buffering
    return response


@csrf_exempt
@require_POST
def epsilon_closure(request):
    """
    Django view computing the epsilon closure of a set of states.

    Expects 'from_states' (list of state names) next to the automaton.
    """
    try:
        data, session, errors = _load_session(request)

        from_states = data.get('from_states')
        if not isinstance(from_states, list) or not all(isinstance(s, str) for s in from_states):
            return JsonResponse({'error': 'from_states must be a list of state names'}, status=400)

        unknown = sorted(set(from_states) - session.automaton.states)
        if unknown:
            return JsonResponse({'error': f'Unknown states: {", ".join(unknown)}'}, status=400)

        return JsonResponse({
            'type': session.kind.value,
            'closure': sorted(session.epsilon_closure(from_states)),
            'construction_errors': errors
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)
