import os

from wrdhntr import create_app, socketio

app = create_app()
 
if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, port=int(os.environ.get('PORT', '3001')), debug=True)
